"""Envelope Route — FastAPI route class that intercepts Response return values.

Invariants:
    - A returned Response is emitted by the EnvelopeAdapter before FastAPI's
      generic jsonable_encoder step, which is then skipped (no double encoding)
    - Any other return value falls through to FastAPI unchanged
    - Sync endpoints stay sync and async endpoints stay async after wrapping
    - Response models are never inferred from the endpoint annotation: the
      envelope, not FastAPI, owns the body shape

Design Decisions:
    - Route class over middleware: middleware sees bytes, the route sees the
      endpoint's return value (ADR: interception before generic serialization)
    - Factory per adapter: collaborators are explicit, EnvelopeRoute is only the
      stock wiring
"""

import functools
import inspect
from typing import Any, Callable

from fastapi.datastructures import DefaultPlaceholder
from fastapi.routing import APIRoute

from envelope_kit.infrastructure.starlette_transport import StarletteTransport
from envelope_kit.schemas.envelope import ERROR_RESPONSES
from envelope_kit.services.envelope_adapter import EnvelopeAdapter, default_adapter


def _emit(adapter: EnvelopeAdapter, result: Any) -> Any:
    transport = StarletteTransport()
    if not adapter.handle(result, transport):
        return result
    return transport.to_response()


def _intercept(endpoint: Callable[..., Any], adapter: EnvelopeAdapter) -> Callable[..., Any]:
    """Wrap endpoint so its Response results go through the adapter."""
    if inspect.iscoroutinefunction(endpoint):
        @functools.wraps(endpoint)
        async def async_wrapper(*args, **kwargs):
            return _emit(adapter, await endpoint(*args, **kwargs))
        return async_wrapper

    @functools.wraps(endpoint)
    def sync_wrapper(*args, **kwargs):
        return _emit(adapter, endpoint(*args, **kwargs))
    return sync_wrapper


def envelope_route_class(adapter: EnvelopeAdapter) -> type[APIRoute]:
    """Build an APIRoute subclass bound to adapter. Pass as route_class=."""

    class EnvelopeRoute(APIRoute):
        def __init__(self, path: str, endpoint: Callable[..., Any], **kwargs: Any):
            response_model = kwargs.get("response_model")
            if response_model is None or isinstance(response_model, DefaultPlaceholder):
                kwargs["response_model"] = None
            kwargs["responses"] = {**ERROR_RESPONSES, **(kwargs.get("responses") or {})}
            super().__init__(path, _intercept(endpoint, adapter), **kwargs)

    return EnvelopeRoute


EnvelopeRoute = envelope_route_class(default_adapter())
