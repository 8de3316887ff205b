"""Structured logging setup for PriceClock.

structlog renders the web layer's events; library modules log through the
standard ``logging`` module and share the same handlers and level.
"""

from __future__ import annotations

import logging
import sys
from typing import Any, TextIO

import structlog

from priceclock.config import get_config


def configure_logging(level: str | None = None, stream: TextIO | None = None) -> None:
    """Configure structured logging for the application.

    Args:
        level: Overrides LOG_LEVEL from config
        stream: Output stream (default: stdout)
    """
    config = get_config()
    level = (level or config.log_level).upper()

    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if config.log_format == "json":
        # Production: JSON logs
        processors = shared_processors + [
            structlog.processors.JSONRenderer()
        ]
    else:
        # Development: Pretty console logs
        processors = shared_processors + [
            structlog.dev.ConsoleRenderer()
        ]

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # Configure standard library logging to use structlog
    logging.basicConfig(
        format="%(message)s",
        handlers=[logging.StreamHandler(stream or sys.stdout)],
        level=level,
    )
    # basicConfig is a no-op once handlers exist; the level must still apply
    logging.getLogger().setLevel(level)
