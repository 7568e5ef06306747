"""Liveness probe and Prometheus metrics."""

import secrets
import time
from collections.abc import Awaitable, Callable

from fastapi import Depends, FastAPI, HTTPException, status
from fastapi.responses import JSONResponse
from fastapi.security import APIKeyHeader
from prometheus_fastapi_instrumentator import Instrumentator
from sqlalchemy import text

from src.tracker.core.config import get_settings
from src.tracker.core.db import get_session
from src.tracker.core.logging import get_logger

logger = get_logger(__name__)

METRICS_KEY_HEADER = "X-Metrics-Key"


async def check_database() -> bool:
    """Run a trivial query against the project store."""
    try:
        async with get_session() as session:
            await session.execute(text("SELECT 1"))
    except Exception:
        logger.warning("Database ping failed", exc_info=True)
        return False
    return True


def setup_health_endpoint(app: FastAPI) -> None:
    """Register GET /health: 200 when the store answers, 503 otherwise."""

    @app.get("/health", include_in_schema=False)
    async def health() -> JSONResponse:
        database_ok = await check_database()
        return JSONResponse(
            status_code=status.HTTP_200_OK if database_ok else status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "healthy" if database_ok else "unhealthy",
                "database": "healthy" if database_ok else "unhealthy",
                "app": get_settings().app_name,
                "timestamp": time.time(),
            },
        )


def _require_metrics_key(expected: str) -> Callable[[str | None], Awaitable[None]]:
    header = APIKeyHeader(name=METRICS_KEY_HEADER, auto_error=False)

    async def verify(api_key: str | None = Depends(header)) -> None:
        if api_key is None or not secrets.compare_digest(api_key, expected):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid or missing metrics API key",
            )

    return verify


def setup_metrics_endpoint(app: FastAPI) -> None:
    """Instrument request handling and expose GET /metrics.

    When METRICS_API_KEY is set the endpoint requires it in X-Metrics-Key.
    """
    instrumentator = Instrumentator(excluded_handlers=["/health", "/metrics"]).instrument(app)

    key = get_settings().metrics_api_key
    dependencies = [Depends(_require_metrics_key(key))] if key else []
    instrumentator.expose(app, endpoint="/metrics", dependencies=dependencies)
