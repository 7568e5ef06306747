"""Project endpoints - CRUD plus aggregate statistics."""

from typing import Annotated

from fastapi import APIRouter, Query, status

from src.tracker.api.dependencies import ProjectServiceDep
from src.tracker.schemas.project import (
    ProjectCreate,
    ProjectDeleted,
    ProjectList,
    ProjectRead,
    ProjectStats,
    ProjectUpdate,
)

router = APIRouter(prefix="/projects", tags=["projects"])


@router.get(
    "",
    response_model=ProjectList,
    summary="List projects",
    description="List projects ordered by last update, optionally filtered by status and priority.",
    responses={
        200: {"description": "Projects and their count"},
        422: {"description": "Invalid filter value"},
    },
)
async def list_projects(
    service: ProjectServiceDep,
    status_filter: Annotated[
        str | None,
        Query(alias="status", description="Only this status: todo, in-progress or completed"),
    ] = None,
    priority: Annotated[
        str | None, Query(description="Only this priority: low, medium or high")
    ] = None,
) -> ProjectList:
    """List projects matching every supplied filter.

    An empty value means "no filter" for that field.
    """
    return await service.list_projects({"status": status_filter, "priority": priority})


@router.get(
    "/stats",
    response_model=ProjectStats,
    summary="Project statistics",
    description="Counts over all projects: total, per status and per priority.",
)
async def get_project_stats(service: ProjectServiceDep) -> ProjectStats:
    """Aggregate counters over all projects."""
    return await service.get_stats()


@router.get(
    "/{project_id}",
    response_model=ProjectRead,
    summary="Get project",
    responses={
        200: {"description": "Project details"},
        404: {"description": "Project not found"},
        422: {"description": "Invalid project ID"},
    },
)
async def get_project(project_id: int, service: ProjectServiceDep) -> ProjectRead:
    """Get a project by ID."""
    project = await service.get_project(project_id)
    return ProjectRead.model_validate(project)


@router.post(
    "",
    response_model=ProjectRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create project",
    description="Create a project. Status defaults to 'todo' and priority to 'medium'.",
    responses={
        201: {"description": "Project created"},
        422: {"description": "Invalid project data"},
    },
)
async def create_project(request: ProjectCreate, service: ProjectServiceDep) -> ProjectRead:
    """Create a new project."""
    project = await service.create_project(request)
    return ProjectRead.model_validate(project)


@router.patch(
    "/{project_id}",
    response_model=ProjectRead,
    summary="Update project",
    description="Update the provided fields of a project; omitted fields are left unchanged.",
    responses={
        200: {"description": "Project updated"},
        404: {"description": "Project not found"},
        422: {"description": "Invalid project data"},
    },
)
async def update_project(
    project_id: int,
    request: ProjectUpdate,
    service: ProjectServiceDep,
) -> ProjectRead:
    """Update an existing project."""
    project = await service.update_project(project_id, request)
    return ProjectRead.model_validate(project)


@router.delete(
    "/{project_id}",
    response_model=ProjectDeleted,
    summary="Delete project",
    responses={
        200: {"description": "Project deleted"},
        404: {"description": "Project not found"},
    },
)
async def delete_project(project_id: int, service: ProjectServiceDep) -> ProjectDeleted:
    """Delete a project."""
    return await service.delete_project(project_id)
