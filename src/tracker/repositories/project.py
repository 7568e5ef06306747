"""Repository for the Project entity."""

from collections.abc import Mapping
from typing import Any

from sqlalchemy import delete, update
from sqlmodel import select

from src.tracker.models import Project, ProjectPriority, ProjectStatus
from src.tracker.repositories.base import BaseRepository


class ProjectRepository(BaseRepository[Project]):
    """SQL-backed implementation of ``ProjectGateway``."""

    model = Project

    async def insert(self, project: Project) -> int:
        """Add a project and flush so the store assigns its id."""
        self.add(project)
        await self.session.flush()
        return project.id  # type: ignore[return-value]

    async def select_all(
        self,
        status: ProjectStatus | None = None,
        priority: ProjectPriority | None = None,
    ) -> list[Project]:
        """List projects ordered by updated_at (oldest first).

        Supplied filters are combined with AND; no filters returns every row.
        """
        query = select(Project)
        if status is not None:
            query = query.where(Project.status == status.value)
        if priority is not None:
            query = query.where(Project.priority == priority.value)
        query = query.order_by(Project.updated_at.asc(), Project.id.asc())  # type: ignore[union-attr]

        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def update_by_id(self, id: int, fields: Mapping[str, Any]) -> bool:
        """Apply ``fields`` to one project. Returns False if no row matched."""
        result = await self.session.execute(
            update(Project).where(Project.id == id).values(**fields)  # type: ignore[arg-type]
        )
        return result.rowcount > 0

    async def delete_by_id(self, id: int) -> bool:
        """Hard-delete one project. Returns False if no row matched."""
        result = await self.session.execute(
            delete(Project).where(Project.id == id)  # type: ignore[arg-type]
        )
        return result.rowcount > 0
