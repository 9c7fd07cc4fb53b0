"""Envelope Variant Encoder — maps each response variant to its canonical document.

Invariants:
    - Ok       → {"data": "ok"}
    - Data     → {"data": <encoded payload>}
    - Error    → {"message", "property" (only if non-blank), "value" (only if not None)}
    - Errors   → [<error document>, ...]
    - Listing  → {"data": [...], "pageSize", "currentPage", "hasMore"}
    - Either   → document of the active branch, no wrapper on the wire
    - File     → never encoded here; reaching this encoder is a contract violation

Design Decisions:
    - Embedded payloads go through the injected TypeResolver: the encoder owns
      only the envelope shapes (ADR: explicit collaborators)
    - Listing keys keep the camelCase names existing clients already parse
    - Contract violations are logged before raising: they are defects, not data errors
"""

from typing import Any

from envelope_kit.core.encoders import SequenceEncoder
from envelope_kit.core.errors import contract_violation
from envelope_kit.core.resolve_encoder import TypeResolver
from envelope_kit.core.responses import (
    ContinuousList, Data, Either, Error, ErrorDetail, Errors, File, Listing, Ok,
    Response,
)
from envelope_kit.core.unify_elements import unify_elements

OK_DOCUMENT = "ok"


class EnvelopeEncoder:
    """Encodes Response variants into document trees."""

    def __init__(self, resolver: TypeResolver):
        self._resolver = resolver

    def encode(self, response: Response) -> Any:
        match response:
            case Ok():
                return {"data": OK_DOCUMENT}
            case Data(payload=payload):
                return {"data": self._resolver.encode_value(payload)}
            case Error(detail=detail):
                return self.encode_error(detail)
            case Errors(details=details):
                return [self.encode_error(detail) for detail in details]
            case Listing(page=page):
                return self.encode_listing(page)
            case Either():
                if isinstance(response.active, File):
                    raise contract_violation(
                        "File responses cannot be nested in Either", "File",
                    )
                return self.encode(response.active)
            case File():
                raise contract_violation(
                    "File responses are streamed, not document-encoded", "File",
                )
            case _:
                raise contract_violation(
                    f"Unknown response variant {type(response).__name__}",
                    type(response).__name__,
                )

    def encode_error(self, detail: ErrorDetail) -> dict:
        document: dict[str, Any] = {"message": detail.message}
        if detail.property is not None and detail.property.strip():
            document["property"] = detail.property
        if detail.value is not None:
            document["value"] = self._resolver.encode_value(detail.value)
        return document

    def encode_listing(self, page: ContinuousList) -> dict:
        element = unify_elements(page.items, self._resolver.resolve)
        return {
            "data": SequenceEncoder(element).encode(page.items),
            "pageSize": page.page_size,
            "currentPage": page.current_page,
            "hasMore": page.has_more,
        }
