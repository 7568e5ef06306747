"""Project model - the single tracked entity."""

from datetime import datetime

from sqlmodel import Field, SQLModel

from src.tracker.models.base import utc_now
from src.tracker.models.enums import ProjectPriority, ProjectStatus

MAX_NAME_LENGTH = 100
MAX_DESCRIPTION_LENGTH = 500


class Project(SQLModel, table=True):
    """Project row.

    ``sqlite_autoincrement`` keeps SQLite from handing out the id of a
    deleted row again; PostgreSQL sequences already behave that way.
    """

    __tablename__ = "projects"
    __table_args__ = {"sqlite_autoincrement": True}

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(max_length=MAX_NAME_LENGTH)
    description: str = Field(max_length=MAX_DESCRIPTION_LENGTH)
    status: str = Field(default=ProjectStatus.TODO.value, max_length=20, index=True)
    priority: str = Field(default=ProjectPriority.MEDIUM.value, max_length=20, index=True)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now, index=True)

    @property
    def status_enum(self) -> ProjectStatus:
        """Get status as ProjectStatus enum."""
        return ProjectStatus(self.status)

    @property
    def priority_enum(self) -> ProjectPriority:
        """Get priority as ProjectPriority enum."""
        return ProjectPriority(self.priority)
