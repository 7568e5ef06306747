"""Client-side state for the project board.

One controller per UI session. It caches the project list and statistics,
tracks the active filter, the create/edit form and a transient notification,
and reloads everything from the server after each successful mutation.
"""

import asyncio
from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager
from typing import Any

from src.tracker.client.actions import ProjectActions
from src.tracker.client.state import BoardState, BoardStatus, Notification, NotificationKind
from src.tracker.core.exceptions import InvalidInputError, TrackerError
from src.tracker.core.logging import get_logger
from src.tracker.schemas.project import (
    ProjectFilter,
    ProjectList,
    ProjectRead,
    ProjectStats,
    parse_input,
)

logger = get_logger(__name__)

DEFAULT_NOTIFICATION_TTL = 5.0

Listener = Callable[[BoardState], None]


class ProjectBoardController:
    """Owns the board's cached view and drives it through ProjectActions.

    Failures never change cached data: the error message is shown in a
    notification and the previous list, stats and form stay as they were.
    """

    def __init__(
        self,
        actions: ProjectActions,
        notification_ttl: float = DEFAULT_NOTIFICATION_TTL,
    ):
        self.actions = actions
        self.notification_ttl = notification_ttl

        self._projects: tuple[ProjectRead, ...] = ()
        self._stats: ProjectStats | None = None
        self._filters = ProjectFilter()
        self._form_open = False
        self._editing: ProjectRead | None = None
        self._notification: Notification | None = None

        self._loading = 0
        self._submitting = False
        # Bumped per list request so a slow, stale response cannot overwrite a newer one
        self._list_generation = 0

        self._dismiss_task: asyncio.Task[None] | None = None
        self._tasks: set[asyncio.Task[Any]] = set()
        self._listeners: list[Listener] = []

    @classmethod
    def from_settings(cls, actions: ProjectActions) -> "ProjectBoardController":
        """Build a controller using NOTIFICATION_TTL_SECONDS from settings."""
        from src.tracker.core.config import get_settings

        return cls(actions, notification_ttl=get_settings().notification_ttl_seconds)

    # --- State ---

    @property
    def status(self) -> BoardStatus:
        if self._submitting:
            return BoardStatus.SUBMITTING
        if self._loading:
            return BoardStatus.LOADING
        if self._notification is not None and self._notification.kind is NotificationKind.ERROR:
            return BoardStatus.ERROR
        return BoardStatus.IDLE

    def snapshot(self) -> BoardState:
        """Return an immutable copy of the current board state."""
        return BoardState(
            status=self.status,
            projects=self._projects,
            stats=self._stats,
            filters=self._filters.model_copy(),
            form_open=self._form_open,
            editing=self._editing,
            notification=self._notification,
        )

    def subscribe(self, listener: Listener) -> None:
        """Call ``listener`` with a fresh snapshot after every state change."""
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _changed(self) -> None:
        state = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("Board listener failed")

    # --- Loading ---

    async def mount(self) -> None:
        """Initial load: list and stats fetched concurrently."""
        await self._reload()

    async def _reload(self) -> None:
        # Independent tasks: one failing or being cancelled leaves the other running
        list_task = asyncio.create_task(self.load_projects())
        stats_task = asyncio.create_task(self.load_stats())
        self._tasks.update((list_task, stats_task))
        try:
            await asyncio.gather(list_task, stats_task, return_exceptions=True)
        finally:
            self._tasks.difference_update((list_task, stats_task))

    async def load_projects(self) -> bool:
        """Fetch the project list for the active filter. Returns success."""
        self._list_generation += 1
        generation = self._list_generation
        filters = self._filters.model_copy()

        with self._busy_loading():
            try:
                result: ProjectList = await self.actions.list_projects(filters)
            except Exception as e:
                self._notify_failure(e, "Failed to load projects")
                return False

            if generation == self._list_generation:
                self._projects = tuple(result.items)
        return True

    async def load_stats(self) -> bool:
        """Fetch global statistics. Returns success."""
        try:
            stats = await self.actions.get_stats()
        except Exception as e:
            self._notify_failure(e, "Failed to load statistics")
            return False

        self._stats = stats
        self._changed()
        return True

    # --- Filters ---

    async def set_filter(
        self,
        status: str | None = None,
        priority: str | None = None,
    ) -> bool:
        """Replace the active filter and reload the list (stats stay global)."""
        try:
            filters = parse_input(ProjectFilter, {"status": status, "priority": priority})
        except InvalidInputError as e:
            self._notify(NotificationKind.ERROR, e.message)
            return False

        self._filters = filters
        self._changed()
        return await self.load_projects()

    async def clear_filters(self) -> bool:
        return await self.set_filter()

    # --- Form ---

    def open_create_form(self) -> None:
        self._form_open = True
        self._editing = None
        self._changed()

    def open_edit_form(self, project: ProjectRead) -> None:
        self._form_open = True
        self._editing = project
        self._changed()

    def cancel_form(self) -> None:
        self._form_open = False
        self._editing = None
        self._changed()

    def _close_form(self) -> None:
        self._form_open = False
        self._editing = None

    async def submit_form(self, data: Mapping[str, Any]) -> bool:
        """Create or update depending on whether a project is being edited."""
        if self._editing is not None:
            return await self.update_project(data)
        return await self.create_project(data)

    # --- Mutations ---

    async def create_project(self, data: Mapping[str, Any]) -> bool:
        with self._busy_submitting():
            try:
                project = await self.actions.create_project(data)
            except Exception as e:
                self._notify_failure(e, "Failed to create project")
                return False

        self._close_form()
        self._notify(NotificationKind.SUCCESS, f'Project "{project.name}" created successfully')
        await self._reload()
        return True

    async def update_project(
        self,
        data: Mapping[str, Any],
        project_id: int | None = None,
    ) -> bool:
        """Update ``project_id``, or the project open in the edit form."""
        if project_id is None:
            if self._editing is None:
                return False
            project_id = self._editing.id

        with self._busy_submitting():
            try:
                await self.actions.update_project(project_id, data)
            except Exception as e:
                self._notify_failure(e, "Failed to update project")
                return False

        self._close_form()
        self._notify(NotificationKind.SUCCESS, "Project updated successfully")
        await self._reload()
        return True

    async def delete_project(self, project_id: int) -> bool:
        with self._busy_submitting():
            try:
                result = await self.actions.delete_project(project_id)
            except Exception as e:
                self._notify_failure(e, "Failed to delete project")
                return False

        self._close_form()
        self._notify(NotificationKind.SUCCESS, result.message)
        await self._reload()
        return True

    @contextmanager
    def _busy_loading(self) -> Iterator[None]:
        self._loading += 1
        self._changed()
        try:
            yield
        finally:
            self._loading -= 1
            self._changed()

    @contextmanager
    def _busy_submitting(self) -> Iterator[None]:
        self._submitting = True
        self._changed()
        try:
            yield
        finally:
            self._submitting = False
            self._changed()

    # --- Notifications ---

    def _notify(self, kind: NotificationKind, message: str) -> None:
        """Show a notification; it replaces any current one and restarts the timer."""
        self._cancel_dismiss_timer()
        notification = Notification(kind=kind, message=message)
        self._notification = notification
        self._dismiss_task = asyncio.create_task(self._auto_dismiss(notification))
        self._changed()

    def _notify_failure(self, error: Exception, fallback: str) -> None:
        if isinstance(error, TrackerError):
            message = error.message
        else:
            logger.warning(fallback, exc_info=error)
            message = fallback
        self._notify(NotificationKind.ERROR, message)

    async def _auto_dismiss(self, notification: Notification) -> None:
        await asyncio.sleep(self.notification_ttl)
        if self._notification is notification:
            self._notification = None
            self._dismiss_task = None
            self._changed()

    def dismiss_notification(self) -> None:
        self._cancel_dismiss_timer()
        if self._notification is not None:
            self._notification = None
            self._changed()

    def _cancel_dismiss_timer(self) -> None:
        if self._dismiss_task is not None and not self._dismiss_task.done():
            self._dismiss_task.cancel()
        self._dismiss_task = None

    async def aclose(self) -> None:
        """Cancel pending loads and the notification timer."""
        pending = [task for task in self._tasks if not task.done()]
        if self._dismiss_task is not None and not self._dismiss_task.done():
            pending.append(self._dismiss_task)
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
        self._tasks.clear()
        self._dismiss_task = None
