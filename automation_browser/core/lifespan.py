"""
FastAPI application lifespan management.

The service holds no long-lived connections; startup only configures
logging and reports which snapshot the listing will read.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from automation_browser.core.config import settings
from automation_browser.core.logging import setup_logging, get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Manage application lifecycle.

    Startup:
      1. Configure logging
      2. Check the snapshot file exists (requests still fail individually
         with a 500 if it is missing)
    """
    # ── Startup ──────────────────────────────────────────────
    setup_logging()
    logger.info("Starting automation browser...")

    if settings.data_file.is_file():
        logger.info("Serving automations from %s", settings.data_file)
    else:
        logger.warning(
            "Automation snapshot %s not found; listing requests will fail",
            settings.data_file,
        )

    yield

    # ── Shutdown ─────────────────────────────────────────────
    logger.info("Shutdown complete")
