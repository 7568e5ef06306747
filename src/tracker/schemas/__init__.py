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

__all__ = [
    "ProjectCreate",
    "ProjectDeleted",
    "ProjectFilter",
    "ProjectList",
    "ProjectRead",
    "ProjectStats",
    "ProjectUpdate",
    "parse_input",
]
