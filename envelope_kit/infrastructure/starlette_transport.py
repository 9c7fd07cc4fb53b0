"""Starlette Transport — Transport protocol implemented on Starlette responses.

Invariants:
    - Exactly one body kind per transport: a document or a file, never both
    - to_response() only succeeds after finish()
    - File bytes are streamed by FileResponse, which opens the file inside its
      ASGI call and closes it on every exit path

Design Decisions:
    - Records intent and builds the Response lazily: the adapter stays synchronous
      and the event loop does the IO (ADR: impureim sandwich)
"""

from pathlib import Path
from typing import Any

from starlette.responses import FileResponse, JSONResponse, Response as StarletteResponse

from envelope_kit.core.errors import contract_violation


class StarletteTransport:
    """Collects status and body, then renders a Starlette response."""

    def __init__(self):
        self._status_code = 200
        self._document: Any = None
        self._has_document = False
        self._file: Path | None = None
        self.finished = False

    def set_status(self, status_code: int) -> None:
        self._status_code = status_code

    def write_document(self, document: Any) -> None:
        self._document = document
        self._has_document = True

    def stream_file(self, path: Path) -> None:
        self._file = path

    def finish(self) -> None:
        self.finished = True

    def to_response(self) -> StarletteResponse:
        if not self.finished:
            raise contract_violation("Transport rendered before finish()")
        if self._file is not None:
            return FileResponse(self._file, status_code=self._status_code)
        if not self._has_document:
            raise contract_violation("Finished transport has no body")
        return JSONResponse(content=self._document, status_code=self._status_code)
