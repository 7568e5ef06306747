"""structlog setup for the API, the CLI and the board client.

Output is JSON unless debug is on, in which case it is rendered for a
terminal. Request-scoped fields live in contextvars so every log line
emitted while handling a request carries its request_id.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.contextvars import bind_contextvars, clear_contextvars

# Libraries that log every query or connection at INFO
_QUIET_LOGGERS = ("sqlalchemy.engine", "aiosqlite", "httpx", "httpcore")


def build_processors(json_output: bool) -> list[structlog.typing.Processor]:
    """Processor chain shared by every entry point, ending in a renderer."""
    renderer: structlog.typing.Processor = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=True)
    )
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        renderer,
    ]


def setup_logging(debug: bool = False, level: str | None = None) -> None:
    """Configure stdlib logging and structlog.

    Args:
        debug: Console rendering and DEBUG level instead of JSON at INFO.
        level: Explicit level name (e.g. "WARNING"); overrides the debug default.
    """
    log_level = logging.getLevelName(level.upper()) if level else None
    if not isinstance(log_level, int):
        log_level = logging.DEBUG if debug else logging.INFO

    logging.basicConfig(format="%(message)s", stream=sys.stdout)
    # basicConfig is a no-op once root has handlers
    logging.getLogger().setLevel(log_level)

    structlog.configure(
        processors=build_processors(json_output=not debug),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def bind_request_context(request_id: str | None, **fields: Any) -> None:
    """Attach request_id (when known) and any extra fields to later log calls."""
    if request_id:
        fields["request_id"] = request_id
    if fields:
        bind_contextvars(**fields)


def clear_request_context() -> None:
    clear_contextvars()
