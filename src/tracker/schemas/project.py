"""Project schemas for API request/response."""

from collections.abc import Mapping
from datetime import datetime
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError, field_validator

from src.tracker.core.exceptions import InvalidInputError, describe_validation_errors
from src.tracker.core.validators import (
    validate_description,
    validate_name,
    validate_priority,
    validate_status,
)
from src.tracker.models.enums import ProjectPriority, ProjectStatus


class ProjectCreate(BaseModel):
    """Schema for creating a project."""

    name: str
    description: str
    status: ProjectStatus = ProjectStatus.TODO
    priority: ProjectPriority = ProjectPriority.MEDIUM

    @field_validator("name", mode="before")
    @classmethod
    def check_name(cls, v: Any) -> str:
        return validate_name(v)

    @field_validator("description", mode="before")
    @classmethod
    def check_description(cls, v: Any) -> str:
        return validate_description(v)

    @field_validator("status", mode="before")
    @classmethod
    def check_status(cls, v: Any) -> ProjectStatus:
        return validate_status(v)

    @field_validator("priority", mode="before")
    @classmethod
    def check_priority(cls, v: Any) -> ProjectPriority:
        return validate_priority(v)


class ProjectUpdate(BaseModel):
    """Schema for a partial project update.

    Only fields the caller actually sent are applied; see ``changes()``.
    Sending a field as null is rejected because none of them are nullable.
    """

    name: str | None = None
    description: str | None = None
    status: ProjectStatus | None = None
    priority: ProjectPriority | None = None

    @field_validator("name", mode="before")
    @classmethod
    def check_name(cls, v: Any) -> str:
        if v is None:
            raise InvalidInputError("Name cannot be null")
        return validate_name(v)

    @field_validator("description", mode="before")
    @classmethod
    def check_description(cls, v: Any) -> str:
        if v is None:
            raise InvalidInputError("Description cannot be null")
        return validate_description(v)

    @field_validator("status", mode="before")
    @classmethod
    def check_status(cls, v: Any) -> ProjectStatus:
        if v is None:
            raise InvalidInputError("Status cannot be null")
        return validate_status(v)

    @field_validator("priority", mode="before")
    @classmethod
    def check_priority(cls, v: Any) -> ProjectPriority:
        if v is None:
            raise InvalidInputError("Priority cannot be null")
        return validate_priority(v)

    def changes(self) -> dict[str, Any]:
        """Return the explicitly provided fields as column values."""
        return self.model_dump(exclude_unset=True, mode="json")


class ProjectFilter(BaseModel):
    """Optional equality filters for listing projects.

    An empty string counts as "no filter", which is what a cleared
    select box submits.
    """

    status: ProjectStatus | None = None
    priority: ProjectPriority | None = None

    @field_validator("status", mode="before")
    @classmethod
    def check_status(cls, v: Any) -> ProjectStatus | None:
        if v is None or v == "":
            return None
        return validate_status(v)

    @field_validator("priority", mode="before")
    @classmethod
    def check_priority(cls, v: Any) -> ProjectPriority | None:
        if v is None or v == "":
            return None
        return validate_priority(v)

    @property
    def is_empty(self) -> bool:
        return self.status is None and self.priority is None


class ProjectRead(BaseModel):
    """Schema for reading a project."""

    id: int
    name: str
    description: str
    status: ProjectStatus
    priority: ProjectPriority
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ProjectList(BaseModel):
    """Ordered projects plus their count."""

    items: list[ProjectRead]
    count: int


class ProjectStats(BaseModel):
    """Aggregate counters over every project."""

    total: int = 0
    todo: int = 0
    in_progress: int = 0
    completed: int = 0
    low_priority: int = 0
    medium_priority: int = 0
    high_priority: int = 0


class ProjectDeleted(BaseModel):
    """Confirmation returned after a delete."""

    id: int
    name: str
    message: str


SchemaType = TypeVar("SchemaType", bound=BaseModel)


def parse_input(
    schema: type[SchemaType], data: SchemaType | Mapping[str, Any] | None
) -> SchemaType:
    """Build ``schema`` from raw input, raising InvalidInputError on failure."""
    if isinstance(data, schema):
        return data
    try:
        return schema.model_validate(data or {})
    except ValidationError as e:
        raise InvalidInputError(describe_validation_errors(e.errors())) from None
