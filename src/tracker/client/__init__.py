"""Client-side state management for the project board."""

from src.tracker.client.actions import (
    HttpProjectActions,
    ProjectActions,
    ServiceProjectActions,
)
from src.tracker.client.controller import ProjectBoardController
from src.tracker.client.state import BoardState, BoardStatus, Notification, NotificationKind

__all__ = [
    "BoardState",
    "BoardStatus",
    "HttpProjectActions",
    "Notification",
    "NotificationKind",
    "ProjectActions",
    "ProjectBoardController",
    "ServiceProjectActions",
]
