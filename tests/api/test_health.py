"""Health Probe — the stock application serves its liveness envelope."""

from httpx import ASGITransport, AsyncClient

from envelope_kit.config import get_settings
from envelope_kit.main import app


async def test_health_returns_data_envelope():
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.get("/api/v1/health/")
    assert response.status_code == 200
    assert response.json() == {
        "data": {
            "status": "healthy",
            "service": get_settings().service_name,
            "version": get_settings().service_version,
        },
    }
