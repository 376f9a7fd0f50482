"""Structured logging setup for the Stock Charts API.

Application events (startup, tool executions, request failures) go through
structlog as JSON lines; engine modules keep using ``logging.getLogger`` and
share the same stdout stream and level.
"""
import logging
import sys
import time
from collections.abc import Iterator
from contextlib import contextmanager

import structlog


def _level(log_level: str) -> int:
    return getattr(logging, log_level.upper(), logging.INFO)


def configure_structured_logging(log_level: str = "INFO", json_output: bool = True) -> None:
    """Configure structured logging for the application.

    Sets up structlog with:
    - JSON rendering, or a console renderer when ``json_output`` is False
    - UTC ISO timestamps
    - Log level filtering shared with the standard library root logger

    Args:
        log_level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_output: Render JSON lines instead of human-readable console lines
    """
    level = _level(log_level)
    logging.basicConfig(format="%(levelname)s %(name)s: %(message)s", stream=sys.stdout, level=level)
    logging.getLogger().setLevel(level)

    renderer = (
        structlog.processors.JSONRenderer() if json_output else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name (typically __name__ of the module)

    Returns:
        BoundLogger instance for structured logging
    """
    return structlog.get_logger(name)


@contextmanager
def log_duration(logger: structlog.BoundLogger, event: str, **fields: object) -> Iterator[None]:
    """Log ``event`` with its elapsed time in milliseconds once the block exits.

    Example:
        >>> with log_duration(logger, "tool_executed", tool="detect_trend_lines"):
        ...     run_tool()
    """
    started = time.perf_counter()
    try:
        yield
    finally:
        duration_ms = round((time.perf_counter() - started) * 1000, 2)
        logger.info(event, duration_ms=duration_ms, **fields)
