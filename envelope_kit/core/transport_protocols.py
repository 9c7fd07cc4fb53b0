"""Boundary Protocols — contract between the envelope adapter and the transport.

Invariants:
    - Core NEVER imports the transport framework; the shell implements this Protocol
    - finish() marks the response complete: the transport must skip its generic
      serialization step for a finished response
    - stream_file() owns the resource lifetime: acquire, emit, release on every exit path

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy (ADR: ExMA anti-pattern)
    - Synchronous methods: the adapter only records intent; the transport performs
      any IO when it emits the response
"""

from pathlib import Path
from typing import Any, Protocol


class Transport(Protocol):
    """Outbound operations the adapter needs from the transport layer."""
    def set_status(self, status_code: int) -> None: ...
    def write_document(self, document: Any) -> None: ...
    def stream_file(self, path: Path) -> None: ...
    def finish(self) -> None: ...
