"""Field rules for project input.

Pure functions: no I/O, same input gives the same verdict. Each one returns
the normalized value or raises InvalidInputError.
"""

from typing import Any

from src.tracker.core.exceptions import InvalidInputError
from src.tracker.models.enums import ProjectPriority, ProjectStatus
from src.tracker.models.project import MAX_DESCRIPTION_LENGTH, MAX_NAME_LENGTH


def _validate_text(value: Any, field: str, max_length: int) -> str:
    if not isinstance(value, str):
        raise InvalidInputError(f"{field.capitalize()} must be a string")
    value = value.strip()
    if not value:
        raise InvalidInputError(f"{field.capitalize()} is required")
    if len(value) > max_length:
        raise InvalidInputError(
            f"{field.capitalize()} cannot exceed {max_length} characters"
        )
    return value


def validate_name(value: Any) -> str:
    """Trim and check a project name (1-100 chars)."""
    return _validate_text(value, "name", MAX_NAME_LENGTH)


def validate_description(value: Any) -> str:
    """Trim and check a project description (1-500 chars)."""
    return _validate_text(value, "description", MAX_DESCRIPTION_LENGTH)


def validate_status(value: Any) -> ProjectStatus:
    try:
        return ProjectStatus(value)
    except ValueError:
        allowed = ", ".join(s.value for s in ProjectStatus)
        raise InvalidInputError(f"Status must be one of: {allowed}") from None


def validate_priority(value: Any) -> ProjectPriority:
    try:
        return ProjectPriority(value)
    except ValueError:
        allowed = ", ".join(p.value for p in ProjectPriority)
        raise InvalidInputError(f"Priority must be one of: {allowed}") from None


def validate_project_id(value: Any) -> int:
    """Check that a project id is a positive integer."""
    # bool is an int subclass; True must not pass as id 1
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise InvalidInputError("Project id must be a positive integer")
    return value
