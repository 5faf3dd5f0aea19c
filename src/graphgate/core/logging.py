"""Structured logging: structlog on top of the standard logging module."""
from __future__ import annotations

import logging
import sys
from typing import Any

import structlog
from structlog.stdlib import LoggerFactory

LOG_FORMATS = ("console", "json")


def setup_logging(level: str = "INFO", format_type: str = "console") -> None:
    """
    Configure process-wide logging. Called by entry points, never by library code.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_type: "console" for human-readable output, "json" for log shippers
    """
    if format_type not in LOG_FORMATS:
        raise ValueError(f"Unknown log format {format_type!r}; expected one of {LOG_FORMATS}")
    log_level = getattr(logging, level.upper(), None)
    if not isinstance(log_level, int):
        raise ValueError(f"Unknown log level {level!r}")

    renderer: Any
    if format_type == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        context_class=dict,
        logger_factory=LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # stderr keeps stdout free for command output
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=log_level, force=True)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Logger bound to a module name, backed by the stdlib logger of that name.
    Until setup_logging runs, output follows the stdlib defaults (WARNING and above to stderr).
    """
    return structlog.wrap_logger(logging.getLogger(name), wrapper_class=structlog.stdlib.BoundLogger)
