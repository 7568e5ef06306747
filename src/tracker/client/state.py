"""Immutable view of the project board for the UI layer."""

from dataclasses import dataclass, field
from enum import Enum

from src.tracker.schemas.project import ProjectFilter, ProjectRead, ProjectStats


class BoardStatus(str, Enum):
    """What the board is busy with right now."""

    IDLE = "idle"
    LOADING = "loading"
    SUBMITTING = "submitting"
    ERROR = "error"  # cleared together with the error notification


class NotificationKind(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class Notification:
    """Transient message shown to the user."""

    kind: NotificationKind
    message: str


@dataclass(frozen=True)
class BoardState:
    """Read-only snapshot of a ProjectBoardController."""

    status: BoardStatus = BoardStatus.IDLE
    projects: tuple[ProjectRead, ...] = ()
    stats: ProjectStats | None = None
    filters: ProjectFilter = field(default_factory=ProjectFilter)
    form_open: bool = False
    editing: ProjectRead | None = None
    notification: Notification | None = None

    @property
    def is_filtered(self) -> bool:
        return not self.filters.is_empty
