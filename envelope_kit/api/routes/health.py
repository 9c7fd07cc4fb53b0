"""Health Probe — liveness endpoint served through the envelope.

Invariants:
    - GET /api/v1/health/ always returns 200 with a Data envelope if the process is up

Design Decisions:
    - Uses EnvelopeRoute like any application router: the probe doubles as a
      smoke test of the interception path
"""

from fastapi import APIRouter

from envelope_kit.api.envelope_route import EnvelopeRoute
from envelope_kit.config import get_settings
from envelope_kit.core.responses import Data

router = APIRouter(prefix="/api/v1/health", tags=["health"], route_class=EnvelopeRoute)


@router.get("/")
async def health_check() -> Data:
    """Basic liveness probe."""
    settings = get_settings()
    return Data({
        "status": "healthy",
        "service": settings.service_name,
        "version": settings.service_version,
    })
