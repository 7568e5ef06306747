"""Alembic migrations produce the same projects table the models describe."""

from pathlib import Path

import pytest
from sqlalchemy import create_engine, inspect

from src.tracker.core.config import get_settings
from src.tracker.core.db import run_migrations_sync

pytestmark = pytest.mark.integration

ALEMBIC_INI = Path(__file__).resolve().parents[2] / "alembic.ini"


@pytest.fixture
def migrated_db(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    db_path = tmp_path / "migrated.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite+aiosqlite:///{db_path}")
    get_settings.cache_clear()
    try:
        run_migrations_sync(str(ALEMBIC_INI))
        engine = create_engine(f"sqlite:///{db_path}")
        yield engine
        engine.dispose()
    finally:
        get_settings.cache_clear()


def test_upgrade_creates_projects_table(migrated_db):
    inspector = inspect(migrated_db)

    assert "projects" in inspector.get_table_names()
    columns = {column["name"] for column in inspector.get_columns("projects")}
    assert columns == {
        "id",
        "name",
        "description",
        "status",
        "priority",
        "created_at",
        "updated_at",
    }
    indexes = {index["name"] for index in inspector.get_indexes("projects")}
    assert {"ix_projects_status", "ix_projects_priority", "ix_projects_updated_at"} <= indexes


def test_upgrade_records_revision(migrated_db):
    with migrated_db.connect() as connection:
        version = connection.exec_driver_sql("SELECT version_num FROM alembic_version").scalar()
    assert version == "001"
