"""Database utilities - engine, session, migrations."""

from src.tracker.core.db.engine import create_tables, dispose_engine, get_engine
from src.tracker.core.db.migrations import run_migrations_async, run_migrations_sync
from src.tracker.core.db.session import get_session, get_session_factory

__all__ = [
    # Engine
    "create_tables",
    "dispose_engine",
    "get_engine",
    # Session
    "get_session",
    "get_session_factory",
    # Migrations
    "run_migrations_async",
    "run_migrations_sync",
]
