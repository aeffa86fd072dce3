"""Tests for the health check endpoint."""

import pytest
from httpx import ASGITransport, AsyncClient

from app.config import Settings
from app.main import create_app


@pytest.mark.asyncio
async def test_health_check_reports_uptime_and_counts():
    """Health endpoint should return 200 with uptime, timestamp and collection counts."""
    transport = ASGITransport(app=create_app())
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/api/health")

    assert response.status_code == 200
    body = response.json()
    assert body["ok"] is True
    data = body["data"]
    assert data["status"] == "ok"
    assert data["uptime"] >= 0
    assert "timestamp" in data
    assert data["counts"] == {"revenueMonths": 7, "products": 5, "transactions": 6}


@pytest.mark.asyncio
async def test_health_counts_follow_mutations():
    transport = ASGITransport(app=create_app())
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        await client.delete("/api/revenue/Jan")
        response = await client.get("/api/health")

    assert response.json()["data"]["counts"]["revenueMonths"] == 6


@pytest.mark.asyncio
async def test_health_reports_environment_and_version():
    settings = Settings(_env_file=None, app_env="staging", app_version="9.9.9")
    transport = ASGITransport(app=create_app(settings))
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/api/health")

    data = response.json()["data"]
    assert data["environment"] == "staging"
    assert data["version"] == "9.9.9"
