"""FastAPI dependency injection definitions."""

from src.tracker.api.dependencies.db import DBSession, get_db_session
from src.tracker.api.dependencies.repositories import ProjectRepo, get_project_repository
from src.tracker.api.dependencies.services import ProjectServiceDep, get_project_service

__all__ = [
    # Database
    "DBSession",
    "get_db_session",
    # Repositories
    "ProjectRepo",
    "get_project_repository",
    # Services
    "ProjectServiceDep",
    "get_project_service",
]
