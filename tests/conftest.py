"""
Shared test fixtures for the automation browser test suite.

Provides:
  - Async test client for FastAPI integration tests
  - A temporary JSON snapshot and a repository reading it
  - Sample automation records
"""

import json
from pathlib import Path
from typing import AsyncIterator
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from automation_browser.api.dependencies import get_automation_service
from automation_browser.domain.automation_service import AutomationService
from automation_browser.domain.models import Automation
from automation_browser.infrastructure.storage.json_repository import (
    AutomationRepository,
)
from automation_browser.main import app

SAMPLE_DOCS = [
    {
        "id": "1",
        "name": "Test Automation 1",
        "type": "robot",
        "creationTime": "2023-01-01T00:00:00.000Z",
        "status": "active",
    },
    {
        "id": "2",
        "name": "Test Automation 2",
        "type": "flow",
        "creationTime": "2023-01-02T00:00:00.000Z",
        "status": "inactive",
    },
    {
        "id": "3",
        "name": "Another Test",
        "type": "application",
        "creationTime": "2023-01-03T00:00:00.000Z",
        "status": "active",
    },
]


@pytest.fixture
def sample_docs() -> list[dict]:
    """The three raw records used throughout the listing tests."""
    return [dict(doc) for doc in SAMPLE_DOCS]


@pytest.fixture
def sample_automations(sample_docs) -> list[Automation]:
    return [Automation.model_validate(doc) for doc in sample_docs]


@pytest.fixture
def snapshot_file(tmp_path: Path, sample_docs) -> Path:
    """Write the sample records to a temporary JSON snapshot."""
    path = tmp_path / "automations.json"
    path.write_text(json.dumps(sample_docs), encoding="utf-8")
    return path


@pytest.fixture
def repository(snapshot_file: Path) -> AutomationRepository:
    return AutomationRepository(data_file=snapshot_file)


@pytest.fixture
def mock_repository(sample_automations):
    """
    Provide a mock AutomationRepository.

    Pre-configured to return the sample automations.
    """
    repo = MagicMock()
    repo.list_automations = AsyncMock(return_value=sample_automations)
    return repo


@pytest_asyncio.fixture
async def async_client(repository) -> AsyncIterator[AsyncClient]:
    """
    Provide an async HTTP test client for integration tests.

    The service dependency is overridden to read the temporary snapshot.
    """
    app.dependency_overrides[get_automation_service] = lambda: AutomationService(
        repository=repository
    )
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(
            transport=transport, base_url="http://testserver"
        ) as client:
            yield client
    finally:
        app.dependency_overrides.clear()

