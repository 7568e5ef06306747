"""Domain error taxonomy and the FastAPI handlers that render it."""

from collections.abc import Mapping, Sequence
from typing import Any

from asgi_correlation_id import correlation_id
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.tracker.core.logging import get_logger

logger = get_logger(__name__)


class TrackerError(Exception):
    """Base class for errors surfaced by the operations layer.

    ``message`` is safe to show to the caller as-is.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Unexpected error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInputError(TrackerError, ValueError):
    """Client-supplied data failed a validation rule."""

    status_code = 422
    default_message = "Invalid input"


class ProjectNotFoundError(TrackerError):
    """Referenced project id does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Project not found"


class InternalError(TrackerError):
    """Unexpected store failure, normalized to a fixed message."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"


_REQUEST_LOCATIONS = {"body", "query", "path"}


def describe_validation_errors(errors: Sequence[Mapping[str, Any]]) -> str:
    """Turn pydantic error dicts into one human-readable message.

    The first error wins. Messages raised by our own validators are passed
    through untouched; anything else is prefixed with the field location.
    """
    if not errors:
        return InvalidInputError.default_message
    error = errors[0]
    cause = (error.get("ctx") or {}).get("error")
    if isinstance(cause, InvalidInputError):
        return cause.message
    location = ".".join(
        str(part) for part in error.get("loc", ()) if part not in _REQUEST_LOCATIONS
    )
    message = str(error.get("msg", InvalidInputError.default_message))
    return f"{location}: {message}" if location else message


def _error_response(status_code: int, detail: object) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "detail": detail,
            "request_id": correlation_id.get(),
        },
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Configure exception handlers that include request_id in responses."""

    @app.exception_handler(TrackerError)
    async def tracker_exception_handler(request: Request, exc: TrackerError) -> JSONResponse:
        return _error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return _error_response(
            InvalidInputError.status_code, describe_validation_errors(exc.errors())
        )

    @app.exception_handler(StarletteHTTPException)
    async def starlette_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return _error_response(exc.status_code, exc.detail)

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return _error_response(exc.status_code, exc.detail)

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(
            "Unhandled exception",
            exc_info=exc,
            request_id=correlation_id.get(),
            path=request.url.path,
        )
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, InternalError.default_message
        )
