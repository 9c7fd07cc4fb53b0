"""Error Handlers — global exception handlers for envelope-encoded APIs.

Invariants:
    - EnvelopeError → structured JSON with error code, message, severity
    - RequestValidationError → Errors envelope (422), one record per field error
    - Exception (catch-all) → never leaks internal details

Design Decisions:
    - Three-layer handler: domain (EnvelopeError), validation (Pydantic), catch-all (Exception)
    - Request validation reuses the Errors variant: clients parse one error shape
      whether the endpoint or FastAPI rejected the input
    - Only primitive inputs are echoed back as value: arbitrary request bodies
      may not be homogeneous enough to encode
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from envelope_kit.core.errors import EnvelopeError, ErrorSeverity
from envelope_kit.core.responses import ErrorDetail, Errors
from envelope_kit.services.envelope_adapter import EnvelopeAdapter, default_adapter

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI, adapter: EnvelopeAdapter | None = None) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_envelope_error_handler(app)
    _register_validation_error_handler(app, adapter or default_adapter())
    _register_generic_error_handler(app)


def _register_envelope_error_handler(app: FastAPI) -> None:
    """Register encoding error handler."""

    @app.exception_handler(EnvelopeError)
    async def envelope_error_handler(request: Request, exc: EnvelopeError):
        """Handle all encoding errors raised while building a response."""
        logger.error(
            f"EnvelopeError: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI, adapter: EnvelopeAdapter) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors as an Errors envelope."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        status_code, document = adapter.encode_response(
            build_validation_errors(exc),
        )
        return JSONResponse(status_code=status_code, content=document)


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all: never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "category": "internal",
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )


def build_validation_errors(exc: RequestValidationError) -> Errors:
    """One ErrorDetail per pydantic error; property is the dotted location."""
    details = []
    for e in exc.errors():
        raw_input = e.get("input")
        details.append(ErrorDetail(
            message=e["msg"],
            property=".".join(str(loc) for loc in e["loc"]),
            value=raw_input if isinstance(raw_input, (str, int, float, bool)) else None,
        ))
    return Errors(details)
