"""Health endpoint tests."""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_health(client: AsyncClient) -> None:
    """GET /api/health returns OK and a timestamp without authentication."""
    response = await client.get("/api/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "OK"
    assert "timestamp" in data


@pytest.mark.asyncio
async def test_readiness_checks_database_and_redis(client: AsyncClient) -> None:
    """GET /api/ready pings the database and the Redis dependency."""
    response = await client.get("/api/ready")
    assert response.status_code == 200
    data = response.json()
    assert data["checks"]["database"] == "ok"
    assert data["checks"]["redis"] == "ok"
    assert data["status"] == "ready"


@pytest.mark.asyncio
async def test_version(client: AsyncClient) -> None:
    """GET /api/version returns version and environment."""
    response = await client.get("/api/version")
    assert response.status_code == 200
    data = response.json()
    assert data["version"] == "0.1.0"
    assert data["environment"] == "test"
