"""Structured logging configuration."""

import logging
import sys

import structlog

from hiring_pipeline.core.config import settings

logger = structlog.get_logger()


def setup_logging() -> None:
    """
    Configure structlog for JSON output.

    Every log line carries the contextvars bound by RequestIDMiddleware,
    the log level and an ISO timestamp.
    """
    level = logging.getLevelNamesMapping().get(settings.log_level.upper(), logging.INFO)

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
