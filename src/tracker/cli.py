"""Command-line entry point: serve the API, migrate or seed the database."""

import argparse
import asyncio
from collections.abc import Sequence

import uvicorn

from src.tracker.core.config import get_settings
from src.tracker.core.db import dispose_engine, get_session, run_migrations_sync
from src.tracker.core.logging import get_logger, setup_logging
from src.tracker.core.seed import seed_if_empty

logger = get_logger(__name__)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments."""
    parser = argparse.ArgumentParser(prog="project-tracker", description="Project tracker")
    commands = parser.add_subparsers(dest="command", required=True)

    serve = commands.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)

    migrate = commands.add_parser("migrate", help="Apply Alembic migrations up to head")
    migrate.add_argument("--config", default="alembic.ini", help="Path to alembic.ini")

    commands.add_parser("seed", help="Insert demo projects if the table is empty")
    return parser.parse_args(argv)


async def _seed() -> bool:
    try:
        async with get_session() as session:
            return await seed_if_empty(session)
    finally:
        await dispose_engine()


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_args(argv)
    settings = get_settings()
    setup_logging(settings.debug, settings.log_level)

    if args.command == "serve":
        uvicorn.run(
            "src.tracker.main:app",
            host=args.host,
            port=args.port,
            log_level="debug" if settings.debug else "info",
        )
    elif args.command == "migrate":
        run_migrations_sync(args.config)
        logger.info("Migrations applied")
    elif args.command == "seed":
        seeded = asyncio.run(_seed())
        logger.info("Seed finished", seeded=seeded)
