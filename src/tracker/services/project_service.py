"""Project operations - validate, call the gateway, shape the result."""

from collections import Counter
from collections.abc import AsyncGenerator, Iterable, Mapping
from contextlib import asynccontextmanager
from datetime import datetime, timedelta
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from src.tracker.core.exceptions import InternalError, ProjectNotFoundError, TrackerError
from src.tracker.core.logging import get_logger
from src.tracker.core.validators import validate_project_id
from src.tracker.models import Project, ProjectPriority, ProjectStatus
from src.tracker.models.base import utc_now
from src.tracker.repositories.protocols import ProjectGateway
from src.tracker.schemas.project import (
    ProjectCreate,
    ProjectDeleted,
    ProjectFilter,
    ProjectList,
    ProjectRead,
    ProjectStats,
    ProjectUpdate,
    parse_input,
)

logger = get_logger(__name__)

RawInput = Mapping[str, Any] | None


def summarize_projects(projects: Iterable[Project]) -> ProjectStats:
    """Count projects in total, per status and per priority."""
    statuses: Counter[ProjectStatus] = Counter()
    priorities: Counter[ProjectPriority] = Counter()
    total = 0
    for project in projects:
        total += 1
        statuses[project.status_enum] += 1
        priorities[project.priority_enum] += 1

    return ProjectStats(
        total=total,
        todo=statuses[ProjectStatus.TODO],
        in_progress=statuses[ProjectStatus.IN_PROGRESS],
        completed=statuses[ProjectStatus.COMPLETED],
        low_priority=priorities[ProjectPriority.LOW],
        medium_priority=priorities[ProjectPriority.MEDIUM],
        high_priority=priorities[ProjectPriority.HIGH],
    )


def next_update_timestamp(previous: datetime) -> datetime:
    """Current time, nudged past ``previous`` so updated_at always moves forward."""
    now = utc_now()
    if now > previous:
        return now
    return previous + timedelta(microseconds=1)


class ProjectService:
    """Project CRUD and statistics - business logic only.

    Input is validated before the store is touched. Anything unexpected that
    escapes the gateway is logged, rolled back and re-raised as InternalError
    with a fixed message.
    """

    def __init__(self, project_repo: ProjectGateway, session: AsyncSession):
        self.project_repo = project_repo
        self.session = session

    @asynccontextmanager
    async def _store_call(self, failure_message: str) -> AsyncGenerator[None]:
        try:
            yield
        except TrackerError:
            await self._rollback()
            raise
        except Exception:
            logger.exception("Project store operation failed", operation=failure_message)
            await self._rollback()
            raise InternalError(failure_message) from None

    async def _rollback(self) -> None:
        try:
            await self.session.rollback()
        except Exception:
            logger.warning("Rollback failed", exc_info=True)

    async def create_project(self, data: ProjectCreate | RawInput) -> Project:
        """Create a project. status/priority default to todo/medium.

        Raises:
            InvalidInputError: If any field fails validation
            InternalError: If the store fails
        """
        payload = parse_input(ProjectCreate, data)

        now = utc_now()
        project = Project(
            name=payload.name,
            description=payload.description,
            status=payload.status.value,
            priority=payload.priority.value,
            created_at=now,
            updated_at=now,
        )
        async with self._store_call("Failed to create project"):
            await self.project_repo.insert(project)
            await self.session.commit()

        logger.info("project_created", project_id=project.id, status=project.status)
        return project

    async def list_projects(self, filters: ProjectFilter | RawInput = None) -> ProjectList:
        """List projects matching every supplied filter, oldest update first."""
        criteria = parse_input(ProjectFilter, filters)

        async with self._store_call("Failed to load projects"):
            projects = await self.project_repo.select_all(
                status=criteria.status,
                priority=criteria.priority,
            )

        return ProjectList(
            items=[ProjectRead.model_validate(p) for p in projects],
            count=len(projects),
        )

    async def get_project(self, project_id: int) -> Project:
        """Get a project by ID.

        Raises:
            InvalidInputError: If project_id is not a positive integer
            ProjectNotFoundError: If no project has this ID
            InternalError: If the store fails
        """
        project_id = validate_project_id(project_id)

        async with self._store_call("Failed to load project"):
            project = await self.project_repo.get_by_id(project_id)

        if project is None:
            raise ProjectNotFoundError()
        return project

    async def update_project(self, project_id: int, data: ProjectUpdate | RawInput) -> Project:
        """Merge the provided fields into an existing project.

        Fields absent from ``data`` are left untouched. updated_at is always
        refreshed, even when no field is provided.

        Raises:
            InvalidInputError: If project_id or a provided field is invalid
            ProjectNotFoundError: If no project has this ID
            InternalError: If the store fails
        """
        project_id = validate_project_id(project_id)
        payload = parse_input(ProjectUpdate, data)
        changes = payload.changes()

        async with self._store_call("Failed to update project"):
            existing = await self.project_repo.get_by_id(project_id)
            if existing is None:
                raise ProjectNotFoundError()

            changes["updated_at"] = next_update_timestamp(existing.updated_at)
            if not await self.project_repo.update_by_id(project_id, changes):
                raise ProjectNotFoundError()
            await self.session.commit()

            project = await self.project_repo.get_by_id(project_id)

        if project is None:
            raise ProjectNotFoundError()

        logger.info(
            "project_updated",
            project_id=project_id,
            fields=sorted(payload.model_fields_set),
        )
        return project

    async def delete_project(self, project_id: int) -> ProjectDeleted:
        """Hard-delete a project and confirm with its name.

        Raises:
            InvalidInputError: If project_id is not a positive integer
            ProjectNotFoundError: If no project has this ID
            InternalError: If the store fails
        """
        project_id = validate_project_id(project_id)

        async with self._store_call("Failed to delete project"):
            existing = await self.project_repo.get_by_id(project_id)
            if existing is None:
                raise ProjectNotFoundError()

            name = existing.name
            if not await self.project_repo.delete_by_id(project_id):
                raise ProjectNotFoundError()
            await self.session.commit()

        logger.info("project_deleted", project_id=project_id)
        return ProjectDeleted(
            id=project_id,
            name=name,
            message=f'Project "{name}" deleted successfully',
        )

    async def get_stats(self) -> ProjectStats:
        """Aggregate counters over all projects (filters never apply)."""
        async with self._store_call("Failed to load project statistics"):
            projects = await self.project_repo.select_all()

        return summarize_projects(projects)
