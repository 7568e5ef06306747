"""ASGI application: project API, health probe and metrics."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from asgi_correlation_id import CorrelationIdMiddleware, correlation_id
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import RequestResponseEndpoint

from src.tracker.api.v1.router import api_router
from src.tracker.core.config import Settings, get_settings
from src.tracker.core.db import (
    create_tables,
    dispose_engine,
    get_session,
    run_migrations_async,
)
from src.tracker.core.exceptions import setup_exception_handlers
from src.tracker.core.health import setup_health_endpoint, setup_metrics_endpoint
from src.tracker.core.logging import (
    bind_request_context,
    clear_request_context,
    get_logger,
    setup_logging,
)
from src.tracker.core.seed import seed_if_empty

logger = get_logger(__name__)

OPENAPI_TAGS = [
    {"name": "projects", "description": "Project tracking and statistics"},
]


async def prepare_database(settings: Settings) -> None:
    """Bring the schema up to date and seed demo rows, as configured."""
    if settings.database_run_migrations:
        await run_migrations_async()
    if settings.database_create_tables:
        await create_tables()
    if settings.seed_demo_data:
        async with get_session() as session:
            seeded = await seed_if_empty(session)
        logger.info("Demo data check finished", seeded=seeded)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    settings = get_settings()
    setup_logging(settings.debug, settings.log_level)
    logger.info("Starting application", app=settings.app_name, env=settings.app_env)

    await prepare_database(settings)

    yield

    await dispose_engine()
    logger.info("Shutdown complete")


async def logging_context_middleware(
    request: Request, call_next: RequestResponseEndpoint
) -> Response:
    """Scope log context to the request, keyed by its correlation id."""
    clear_request_context()
    bind_request_context(correlation_id.get(), method=request.method, path=request.url.path)
    try:
        return await call_next(request)
    finally:
        clear_request_context()


def _setup_middleware(app: FastAPI, settings: Settings) -> None:
    # Starlette wraps in reverse order: the last one added runs first
    app.middleware("http")(logging_context_middleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE"],
        allow_headers=["Content-Type", "X-Request-ID"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(CorrelationIdMiddleware)


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Track projects by status and priority",
        version="0.1.0",
        openapi_tags=OPENAPI_TAGS,
        openapi_url="/openapi.json" if settings.enable_openapi else None,
        lifespan=lifespan,
    )

    setup_exception_handlers(app)
    _setup_middleware(app, settings)

    app.include_router(api_router)
    setup_metrics_endpoint(app)
    setup_health_endpoint(app)

    return app


app = create_app()
