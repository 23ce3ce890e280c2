"""
Logging setup for Bookshelf.

All modules log through structlog. Values scoped to one request (its id and,
once the token is verified, the user id) are bound as structlog context
variables and merged into every event emitted while handling that request.
"""

import logging
import secrets
import sys
from typing import Any

import structlog
from structlog.contextvars import (
    bind_contextvars,
    clear_contextvars,
    get_contextvars,
    merge_contextvars,
)


def configure_logging(debug: bool = False) -> None:
    """Route structlog through stdlib logging.

    Debug mode renders colored console lines; otherwise every event is one
    JSON object per line.
    """
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        stream=sys.stdout,
        format="%(message)s",
        force=True,
    )

    renderer = (
        structlog.dev.ConsoleRenderer(colors=True)
        if debug
        else structlog.processors.JSONRenderer()
    )

    structlog.configure(
        processors=[
            merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def generate_request_id() -> str:
    """Random url-safe id for requests that arrive without X-Request-ID."""
    return secrets.token_urlsafe(12)


def set_request_context(*, request_id: str | None = None, user_id: str | None = None) -> None:
    """Bind request-scoped values to later log events. None leaves a value as it is."""
    values = {"request_id": request_id, "user_id": user_id}
    bind_contextvars(**{key: value for key, value in values.items() if value is not None})


def get_request_context() -> dict[str, Any]:
    return get_contextvars()


def clear_request_context() -> None:
    clear_contextvars()
