"""
Simple test to verify the test setup is working correctly.
"""

import pytest

from app.config import settings

pytestmark = pytest.mark.asyncio


async def test_root(client):
    response = await client.get("/")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "environment": "test"}


async def test_health_check(client):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["database"] == "connected"


async def test_request_id_echoed(client):
    response = await client.get("/", headers={"X-Request-ID": "abc-123"})

    assert response.headers["X-Request-ID"] == "abc-123"


async def test_request_id_generated(client):
    response = await client.get("/")

    assert response.headers.get("X-Request-ID")


def test_settings_for_tests():
    assert settings.ENVIRONMENT == "test"
    assert settings.API_PREFIX == "/api"
    assert "sqlite+aiosqlite" in settings.DATABASE_URL


async def test_unknown_route_uses_error_shape(client):
    response = await client.get("/api/nothing-here")

    assert response.status_code == 404
    assert response.json() == {"detail": "Not Found"}
