"""Envelope Schemas — Pydantic models describing the wire shapes for OpenAPI.

Invariants:
    - Documentation only: encoding never goes through these models
    - Field names and aliases match the documents EnvelopeEncoder produces

Design Decisions:
    - Separate from core responses: schemas are API contracts, variants are
      runtime values (ADR: DDD boundary)
"""

from typing import Any

from pydantic import BaseModel


class ErrorDocument(BaseModel):
    """One validation error. property/value are omitted when absent."""
    message: str
    property: str | None = None
    value: Any | None = None


ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    422: {
        "model": list[ErrorDocument] | ErrorDocument,
        "description": "Validation error envelope",
    },
}
