"""Tests for the health and metrics endpoints."""

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.integration


async def test_health_pings_database(client: AsyncClient) -> None:
    response = await client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["database"] == "healthy"


async def test_health_reports_unreachable_database(
    client: AsyncClient, monkeypatch: pytest.MonkeyPatch
) -> None:
    def _broken_session():
        raise ConnectionError("database is down")

    monkeypatch.setattr("src.tracker.core.health.get_session", _broken_session)

    response = await client.get("/health")

    assert response.status_code == 503
    assert response.json()["database"] == "unhealthy"


async def test_metrics_exposed(client: AsyncClient) -> None:
    await client.get("/api/v1/projects")

    response = await client.get("/metrics")

    assert response.status_code == 200
    assert "http_request" in response.text
