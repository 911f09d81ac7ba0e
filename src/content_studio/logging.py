"""Structured logging configuration.

Log lines are event names with key-value context. Generated images travel
as base64 data URIs, so any such value is shortened before rendering. Work
on a single project binds its id into the context for every line it emits,
including lines from concurrent section calls.
"""

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import structlog
from structlog.typing import EventDict, WrappedLogger

from content_studio.config import settings

DATA_URI_PREVIEW_CHARS = 48


def shorten_data_uris(_: WrappedLogger, __: str, event_dict: EventDict) -> EventDict:
    """Replace long ``data:`` URI values with their header and size."""
    for key, value in event_dict.items():
        if isinstance(value, str) and value.startswith("data:") and len(value) > DATA_URI_PREVIEW_CHARS:
            header = value.split(",", 1)[0]
            event_dict[key] = f"{header},<{len(value)} chars>"
    return event_dict


def setup_logging(level: str | None = None) -> None:
    """Configure structured logging for the application.

    Args:
        level: Overrides ``settings.log_level`` (the CLI passes DEBUG for --verbose)
    """
    if settings.log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        shorten_data_uris,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    # stdout is reserved for CLI output
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    # One handler only; this runs twice under CLI --verbose
    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel((level or settings.log_level).upper())

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("google_genai").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)


@contextmanager
def bind_project(project_id: str) -> Iterator[None]:
    """Attach ``project_id`` to every log line emitted inside the block."""
    with structlog.contextvars.bound_contextvars(project_id=project_id):
        yield


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a logger instance for a module."""
    return structlog.get_logger(name)
