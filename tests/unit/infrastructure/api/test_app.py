"""Tests for the application factory."""

from unittest.mock import AsyncMock, patch

import pytest
from fastapi import APIRouter
from httpx import ASGITransport, AsyncClient

from tasklane.infrastructure.api.app import create_app


@pytest.mark.asyncio
async def test_health(client):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


@pytest.mark.asyncio
async def test_ready_reports_database_state(client):
    manager = AsyncMock()
    manager.check_connection.return_value = False
    with patch("tasklane.infrastructure.api.app.get_db_manager", return_value=manager):
        down = await client.get("/ready")
    manager.check_connection.return_value = True
    with patch("tasklane.infrastructure.api.app.get_db_manager", return_value=manager):
        up = await client.get("/ready")

    assert down.status_code == 503
    assert down.json()["database"] == "disconnected"
    assert up.status_code == 200
    assert up.json()["database"] == "connected"


@pytest.mark.asyncio
async def test_correlation_id_is_echoed(client):
    response = await client.get("/health", headers={"X-Correlation-ID": "cid_test123"})

    assert response.headers["X-Correlation-ID"] == "cid_test123"


@pytest.mark.asyncio
async def test_correlation_id_is_generated(client):
    response = await client.get("/health")

    assert response.headers["X-Correlation-ID"].startswith("cid_")


@pytest.mark.asyncio
async def test_unhandled_errors_become_500():
    app = create_app()
    router = APIRouter()

    @router.get("/boom")
    async def boom():
        raise RuntimeError("kaboom")

    app.include_router(router)
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        response = await ac.get("/boom")

    assert response.status_code == 500
    assert response.json()["error"] == "Internal server error"
