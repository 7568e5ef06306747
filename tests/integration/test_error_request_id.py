"""Tests for request_id in error responses."""

from uuid import uuid4

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from src.tracker.api.dependencies import get_project_service

pytestmark = pytest.mark.integration


async def test_not_found_route_includes_request_id(client: AsyncClient) -> None:
    response = await client.get("/api/v1/nonexistent-endpoint")

    assert response.status_code == 404
    data = response.json()
    assert "detail" in data
    assert isinstance(data["request_id"], str)


async def test_domain_error_includes_request_id(client: AsyncClient) -> None:
    response = await client.get("/api/v1/projects/12345")

    assert response.status_code == 404
    data = response.json()
    assert data["detail"] == "Project not found"
    assert data["request_id"] == response.headers["X-Request-ID"]


async def test_validation_error_includes_request_id(client: AsyncClient) -> None:
    response = await client.post("/api/v1/projects", json={"name": "x"})

    assert response.status_code == 422
    assert response.json()["request_id"] is not None


async def test_incoming_request_id_is_echoed(client: AsyncClient) -> None:
    request_id = uuid4().hex

    response = await client.get("/api/v1/projects/999", headers={"X-Request-ID": request_id})

    assert response.headers["X-Request-ID"] == request_id
    assert response.json()["request_id"] == request_id


async def test_unexpected_error_has_fixed_message(app: FastAPI) -> None:
    """The generic handler hides the cause; the server still re-raises it."""

    class ExplodingService:
        async def get_stats(self):
            raise RuntimeError("secret connection string leaked")

    app.dependency_overrides[get_project_service] = lambda: ExplodingService()

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/api/v1/projects/stats")

    assert response.status_code == 500
    assert response.json()["detail"] == "Internal server error"
    assert "secret" not in response.text
