"""Service factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.tracker.api.dependencies.db import DBSession
from src.tracker.api.dependencies.repositories import ProjectRepo
from src.tracker.services.project_service import ProjectService


def get_project_service(project_repo: ProjectRepo, session: DBSession) -> ProjectService:
    """Get project service."""
    return ProjectService(project_repo, session)


ProjectServiceDep = Annotated[ProjectService, Depends(get_project_service)]
