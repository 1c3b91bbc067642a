"""
FastAPI dependency injection.

Provides shared instances for use across API endpoints,
ensuring consistent lifecycle management and testability.
"""

from automation_browser.domain.automation_service import AutomationService
from automation_browser.infrastructure.storage.json_repository import (
    AutomationRepository,
)


def get_automation_service() -> AutomationService:
    """
    Provide an AutomationService wired to the configured snapshot.

    A fresh repository per request keeps every query reading the
    snapshot as it is on disk now.
    """
    repository = AutomationRepository()
    return AutomationService(repository=repository)
