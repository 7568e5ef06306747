"""Gateway contract between the operations service and a record store.

Any store works as long as it offers single-record atomic insert, filtered
select, update and delete. ``ProjectRepository`` is the SQL implementation.
"""

from collections.abc import Mapping
from typing import Any, Protocol

from src.tracker.models import Project, ProjectPriority, ProjectStatus


class ProjectGateway(Protocol):
    """Contract for project persistence."""

    async def insert(self, project: Project) -> int: ...

    async def select_all(
        self,
        status: ProjectStatus | None = None,
        priority: ProjectPriority | None = None,
    ) -> list[Project]: ...

    async def get_by_id(self, id: int) -> Project | None: ...

    async def update_by_id(self, id: int, fields: Mapping[str, Any]) -> bool: ...

    async def delete_by_id(self, id: int) -> bool: ...
