"""Integration tests for health endpoints."""

import pytest

from api.routes.health import VERSION


@pytest.mark.asyncio
@pytest.mark.parametrize("path", ["/health", "/api/v1/health"])
async def test_health(client, path):
    response = await client.get(path)

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "version": VERSION}


@pytest.mark.asyncio
async def test_ready(client):
    response = await client.get("/ready")

    assert response.status_code == 200
    assert response.json() == {"status": "ready", "database": "up"}


@pytest.mark.asyncio
async def test_request_id_echoed(client):
    response = await client.get("/api/v1/companies", headers={"x-request-id": "abc-123"})
    assert response.headers["x-request-id"] == "abc-123"
