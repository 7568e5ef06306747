"""The board controller driven against the real API and service layer."""

from collections.abc import AsyncGenerator

import httpx
import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.tracker.client import (
    BoardStatus,
    HttpProjectActions,
    NotificationKind,
    ProjectBoardController,
    ServiceProjectActions,
)
from src.tracker.client.actions import error_from_response
from src.tracker.core.exceptions import InternalError, InvalidInputError, ProjectNotFoundError
from src.tracker.models import Project

pytestmark = pytest.mark.integration


@pytest.fixture
async def http_board(client: AsyncClient) -> AsyncGenerator[ProjectBoardController]:
    board = ProjectBoardController(HttpProjectActions(client))
    yield board
    await board.aclose()


@pytest.fixture
async def service_board(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[ProjectBoardController]:
    board = ProjectBoardController(ServiceProjectActions(session_factory))
    yield board
    await board.aclose()


async def test_mount_over_http(http_board: ProjectBoardController, seeded: list[Project]):
    await http_board.mount()

    state = http_board.snapshot()
    assert state.status is BoardStatus.IDLE
    assert [p.name for p in state.projects][-1] == "E-commerce Website"
    assert state.stats.total == 4
    assert state.stats.high_priority == 2


async def test_create_filter_and_delete_over_http(
    http_board: ProjectBoardController, seeded: list[Project]
):
    await http_board.mount()

    http_board.open_create_form()
    assert await http_board.submit_form(
        {"name": "Search", "description": "Full-text search", "priority": "high"}
    )
    state = http_board.snapshot()
    assert state.notification.message == 'Project "Search" created successfully'
    assert state.stats.total == 5
    assert state.projects[-1].name == "Search"

    await http_board.set_filter(priority="high")
    assert {p.name for p in http_board.snapshot().projects} == {
        "E-commerce Website",
        "REST API",
        "Search",
    }

    created = http_board.snapshot().projects[-1]
    assert await http_board.delete_project(created.id)
    state = http_board.snapshot()
    assert state.notification.message == 'Project "Search" deleted successfully'
    assert state.stats.total == 4
    # The filter survives the reload
    assert all(p.priority == "high" for p in state.projects)


async def test_server_validation_message_reaches_notification(
    http_board: ProjectBoardController,
):
    http_board.open_create_form()

    assert not await http_board.submit_form({"name": "x" * 101, "description": "d"})

    state = http_board.snapshot()
    assert state.form_open
    assert state.notification.kind is NotificationKind.ERROR
    assert state.notification.message == "Name cannot exceed 100 characters"


async def test_missing_project_over_http(http_board: ProjectBoardController):
    assert not await http_board.update_project({"name": "Nope"}, project_id=999)
    assert http_board.snapshot().notification.message == "Project not found"


async def test_service_actions_round_trip(
    service_board: ProjectBoardController, seeded: list[Project]
):
    await service_board.mount()
    target = service_board.snapshot().projects[0]

    service_board.open_edit_form(target)
    assert await service_board.submit_form({"status": "completed"})

    state = service_board.snapshot()
    assert state.stats.completed == 2
    assert state.projects[-1].id == target.id
    assert state.projects[-1].status == "completed"


@pytest.mark.parametrize(
    ("status_code", "error_cls"),
    [
        (404, ProjectNotFoundError),
        (422, InvalidInputError),
        (400, InvalidInputError),
        (500, InternalError),
        (503, InternalError),
    ],
)
def test_error_from_response_maps_status(status_code, error_cls):
    response = httpx.Response(status_code, json={"detail": "Server said no"})

    error = error_from_response(response)

    assert type(error) is error_cls
    assert error.message == "Server said no"


def test_error_from_response_without_json_body():
    error = error_from_response(httpx.Response(502, text="Bad Gateway"))

    assert isinstance(error, InternalError)
    assert error.message == "Internal server error"
