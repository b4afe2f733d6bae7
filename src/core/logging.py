"""Structured logging setup."""

import logging
import sys

import structlog

from core.config import settings


def setup_logging(level: str | None = None, log_format: str | None = None) -> None:
    """Configure stdlib logging and structlog processors.

    JSON output is used when ``log_format`` is ``"json"`` (production),
    a colored console renderer otherwise.
    """
    level_name = (level or settings.log_level).upper()
    log_level = getattr(logging, level_name, logging.INFO)
    fmt = (log_format or settings.log_format).lower()

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )

    processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if fmt == "json":
        processors.extend([
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ])
    else:
        processors.extend([
            structlog.dev.set_exc_info,
            structlog.dev.ConsoleRenderer(colors=not settings.is_production),
        ])

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
