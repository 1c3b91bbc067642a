"""
Logging configuration.

Pipe-delimited log lines on stdout, shared by the API process and the
headless table client. Third-party request logging is held at WARNING
whatever LOG_LEVEL says.
"""

import logging
import sys
from typing import Optional

from automation_browser.core.config import settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)-40s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

QUIET_LOGGERS = ("uvicorn.access", "httpx", "httpcore")


def resolve_level(name: Optional[str]) -> int:
    """Map a level name ("debug", "INFO", ...) to its number; unknown names mean INFO."""
    level = logging.getLevelName((name or "").upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logging(level: Optional[str] = None) -> None:
    """Configure root logging; ``level`` overrides the LOG_LEVEL setting."""
    logging.basicConfig(
        level=resolve_level(level or settings.log_level),
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        stream=sys.stdout,
        force=True,
    )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
