# src/joindata/core/logging.py
"""Structured logging for joindata.

Every module logs through get_logger(__name__), so all events live under the
"joindata" stdlib logger tree. The engine emits join_started, join_misses,
join_completed and join_fetch_failed; the registry binds the registry name
to every event of a join with bind_join_context().

Nothing is printed until the application opts in. configure_logging()
attaches a structlog ProcessorFormatter handler to the "joindata" logger
only, leaving the application's root logger and handlers alone.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, TextIO

import structlog
from structlog.stdlib import ProcessorFormatter

if TYPE_CHECKING:
    from joindata.core.config import JoinSettings

LIBRARY_LOGGER = "joindata"


def _shared_processors() -> list[Any]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]


def _renderer(json_output: bool) -> list[Any]:
    if json_output:
        return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return [structlog.dev.ConsoleRenderer(colors=False)]


def configure_logging(
    *,
    json_output: bool = False,
    level: str = "INFO",
    stream: TextIO | None = None,
) -> logging.Handler:
    """Send joindata's events to a stream.

    Args:
        json_output: One JSON object per line instead of console output
        level: Level of the "joindata" logger (DEBUG shows per-join detail)
        stream: Output stream, sys.stdout by default

    Returns:
        The handler attached to the "joindata" logger
    """
    shared = _shared_processors()
    structlog.configure(
        processors=[*shared, ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Reconfigurable at runtime (tests, settings reloads)
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    handler.setFormatter(
        ProcessorFormatter(
            processors=[ProcessorFormatter.remove_processors_meta, *_renderer(json_output)],
            foreign_pre_chain=shared,
        )
    )

    library_logger = logging.getLogger(LIBRARY_LOGGER)
    library_logger.handlers = [handler]
    library_logger.setLevel(getattr(logging, level.upper()))
    library_logger.propagate = False
    return handler


def configure_from_settings(settings: JoinSettings, *, stream: TextIO | None = None) -> logging.Handler:
    """Configure logging from the logging section of JoinSettings."""
    return configure_logging(json_output=settings.logging.json_output, level=settings.logging.level, stream=stream)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Logger for a joindata module (name is normally __name__)."""
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return logger


@contextmanager
def bind_join_context(**context: Any) -> Iterator[None]:
    """Add key/values to every event logged inside the block, across awaits."""
    with structlog.contextvars.bound_contextvars(**context):
        yield
