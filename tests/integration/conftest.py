"""Integration test fixtures for the HTTP API.

The app runs in-process over ASGITransport with its session dependency
bound to the per-test in-memory database.
"""

from collections.abc import AsyncGenerator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.tracker.api.dependencies import get_db_session
from src.tracker.core import db
from src.tracker.main import create_app


@pytest.fixture
async def app(session_factory: async_sessionmaker[AsyncSession]) -> AsyncGenerator[FastAPI]:
    """App whose request sessions come from the test engine."""
    await db.dispose_engine()

    application = create_app()

    async def _test_session() -> AsyncGenerator[AsyncSession]:
        async with session_factory() as session:
            yield session

    application.dependency_overrides[get_db_session] = _test_session
    yield application
    application.dependency_overrides.clear()

    await db.dispose_engine()


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client
