"""Shared enums for models."""

from enum import Enum


class ProjectStatus(str, Enum):
    """Lifecycle stage of a project."""

    TODO = "todo"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class ProjectPriority(str, Enum):
    """Urgency tag of a project."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
