"""Structured logging for benchmark runs.

Log events are structlog key/value records written to stderr so that the
reports a command prints on stdout can be piped or redirected on their own.
Events emitted while a run is in progress carry the run's config name and
target label through ``log_context``.
"""

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import structlog

__all__ = ["configure_logging", "get_logger", "log_context"]

# Per-request INFO lines from the HTTP stack, shown only with --verbose.
_HTTP_LOGGERS = ("httpx", "httpcore")


def configure_logging(verbose: bool = False, json_output: bool = False) -> None:
    """Configure structlog and the stdlib root logger.

    Args:
        verbose: Log at DEBUG, including every backend and judge request.
        json_output: Render one JSON object per event instead of console lines.

    """
    level = logging.DEBUG if verbose else logging.INFO

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=level,
        force=True,
    )
    for name in _HTTP_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if verbose else logging.WARNING)

    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if json_output:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger.

    Example:
        logger = get_logger(__name__)
        logger.info("suite_started", suite="dedup", cases=12)

    """
    return structlog.get_logger(name)


@contextmanager
def log_context(**values: Any) -> Iterator[None]:
    """Attach ``values`` to every event logged inside the block.

    Tasks created inside the block (suite fan-out, judge calls) inherit
    the values.
    """
    with structlog.contextvars.bound_contextvars(**values):
        yield
