"""Structured logging setup.

The MCP transport owns stdout, so all log output goes to stderr.
"""

import logging
import os
import sys
from typing import Optional

import structlog

DEFAULT_LEVEL = "WARNING"


def configure_logging(level: Optional[str] = None) -> None:
    """Configure structlog for the server process.

    Args:
        level: Log level name; defaults to $FORGEMUNCH_LOG_LEVEL or WARNING
    """
    name = (level or os.environ.get("FORGEMUNCH_LOG_LEVEL") or DEFAULT_LEVEL).upper()
    numeric = logging.getLevelName(name)
    if not isinstance(numeric, int):
        numeric = logging.WARNING

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )
