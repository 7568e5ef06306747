"""Model exports.

Import from here: `from src.tracker.models import Project, ProjectStatus`
"""

from src.tracker.models.enums import ProjectPriority, ProjectStatus
from src.tracker.models.project import Project

__all__ = [
    # Enums
    "ProjectPriority",
    "ProjectStatus",
    # Tables
    "Project",
]
