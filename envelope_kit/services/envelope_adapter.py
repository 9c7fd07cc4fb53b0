"""Envelope Transport Adapter — hands an outgoing Response to the transport.

Invariants:
    - File responses bypass document encoding: status, raw stream, finish
    - Other responses: status + encoded document, then finish
    - The document is computed before the transport is touched: an encoding
      failure leaves the transport untouched and propagates to the caller
    - Non-Response values are left alone (handle() returns False) so the
      transport's generic serialization still runs for them

Design Decisions:
    - Adapter lives in the shell-facing services layer: it orchestrates pure core
      functions around one IO collaborator (ADR: ExMA impureim sandwich)
    - Collaborators injected explicitly; default_adapter() wires the stock ones
"""

import logging
from pathlib import Path
from typing import Any

from envelope_kit.core.encode_envelope import EnvelopeEncoder
from envelope_kit.core.map_status import response_status
from envelope_kit.core.resolve_encoder import TypeResolver
from envelope_kit.core.responses import File, Response, is_response
from envelope_kit.core.transport_protocols import Transport

logger = logging.getLogger(__name__)


class EnvelopeAdapter:
    """Interception point between endpoint results and the transport."""

    def __init__(self, encoder: EnvelopeEncoder):
        self._encoder = encoder

    def encode_response(self, response: Response) -> tuple[int, Any | Path]:
        """Return (status, body). File bodies are the path to stream."""
        status = response_status(response)
        if isinstance(response, File):
            return status, response.path
        return status, self._encoder.encode(response)

    def handle(self, value: Any, transport: Transport) -> bool:
        """Emit value through transport if it is a Response. Returns True when handled."""
        if not is_response(value):
            return False

        status, body = self.encode_response(value)
        variant = type(value).__name__
        transport.set_status(status)
        if isinstance(value, File):
            transport.stream_file(body)
        else:
            transport.write_document(body)
        transport.finish()

        logger.debug(
            f"Emitted {variant} response",
            extra={"variant": variant, "status_code": status},
        )
        return True


def default_adapter() -> EnvelopeAdapter:
    """Adapter wired with a resolver that has no custom encoders."""
    return EnvelopeAdapter(EnvelopeEncoder(TypeResolver()))
