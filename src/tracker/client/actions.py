"""Ways for the board controller to reach the project operations.

``ServiceProjectActions`` calls ProjectService in-process with a fresh
session per call. ``HttpProjectActions`` goes through the HTTP API and maps
error responses back onto the same exception classes.
"""

from collections.abc import AsyncGenerator, Mapping
from contextlib import asynccontextmanager
from typing import Any, Protocol

import httpx
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.tracker.core.exceptions import (
    InternalError,
    InvalidInputError,
    ProjectNotFoundError,
    TrackerError,
)
from src.tracker.repositories import ProjectRepository
from src.tracker.schemas.project import (
    ProjectDeleted,
    ProjectFilter,
    ProjectList,
    ProjectRead,
    ProjectStats,
)
from src.tracker.services.project_service import ProjectService


class ProjectActions(Protocol):
    """Operations the board controller depends on."""

    async def list_projects(self, filters: ProjectFilter) -> ProjectList: ...

    async def get_stats(self) -> ProjectStats: ...

    async def create_project(self, data: Mapping[str, Any]) -> ProjectRead: ...

    async def update_project(self, project_id: int, data: Mapping[str, Any]) -> ProjectRead: ...

    async def delete_project(self, project_id: int) -> ProjectDeleted: ...


class ServiceProjectActions:
    """In-process actions backed by ProjectService."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    @asynccontextmanager
    async def _service(self) -> AsyncGenerator[ProjectService]:
        async with self.session_factory() as session:
            yield ProjectService(ProjectRepository(session), session)

    async def list_projects(self, filters: ProjectFilter) -> ProjectList:
        async with self._service() as service:
            return await service.list_projects(filters)

    async def get_stats(self) -> ProjectStats:
        async with self._service() as service:
            return await service.get_stats()

    async def create_project(self, data: Mapping[str, Any]) -> ProjectRead:
        async with self._service() as service:
            project = await service.create_project(data)
            return ProjectRead.model_validate(project)

    async def update_project(self, project_id: int, data: Mapping[str, Any]) -> ProjectRead:
        async with self._service() as service:
            project = await service.update_project(project_id, data)
            return ProjectRead.model_validate(project)

    async def delete_project(self, project_id: int) -> ProjectDeleted:
        async with self._service() as service:
            return await service.delete_project(project_id)


def error_from_response(response: httpx.Response) -> TrackerError:
    """Rebuild a TrackerError from an API error response."""
    try:
        body = response.json()
    except ValueError:
        body = None
    detail = body.get("detail") if isinstance(body, dict) else None
    message = detail if isinstance(detail, str) else None

    if response.status_code == 404:
        return ProjectNotFoundError(message)
    if response.status_code in (400, 422):
        return InvalidInputError(message)
    return InternalError(message)


class HttpProjectActions:
    """Actions that call the project HTTP API with an httpx client.

    The client is owned by the caller, who configures its base URL and
    closes it.
    """

    def __init__(self, client: httpx.AsyncClient, prefix: str = "/api/v1/projects"):
        self.client = client
        self.prefix = prefix.rstrip("/")

    async def _request(self, method: str, path: str = "", **kwargs: Any) -> Any:
        response = await self.client.request(method, f"{self.prefix}{path}", **kwargs)
        if response.is_error:
            raise error_from_response(response)
        return response.json()

    async def list_projects(self, filters: ProjectFilter) -> ProjectList:
        params = filters.model_dump(mode="json", exclude_none=True)
        return ProjectList.model_validate(await self._request("GET", params=params))

    async def get_stats(self) -> ProjectStats:
        return ProjectStats.model_validate(await self._request("GET", "/stats"))

    async def create_project(self, data: Mapping[str, Any]) -> ProjectRead:
        return ProjectRead.model_validate(await self._request("POST", json=dict(data)))

    async def update_project(self, project_id: int, data: Mapping[str, Any]) -> ProjectRead:
        body = await self._request("PATCH", f"/{project_id}", json=dict(data))
        return ProjectRead.model_validate(body)

    async def delete_project(self, project_id: int) -> ProjectDeleted:
        return ProjectDeleted.model_validate(await self._request("DELETE", f"/{project_id}"))
