"""
Unit tests for the JSON snapshot repository.

Tests cover:
  - Loading and validating records
  - Re-reading the file on every call
  - Read, parse and validation failures
"""

import json

import pytest

from automation_browser.core.exceptions import SourceUnavailableError
from automation_browser.domain.models import AutomationStatus, AutomationType
from automation_browser.infrastructure.storage.json_repository import (
    AutomationRepository,
)


@pytest.mark.asyncio
class TestListAutomations:
    """Tests for AutomationRepository.list_automations()."""

    async def test_loads_records_in_file_order(self, repository):
        records = await repository.list_automations()

        assert [record.id for record in records] == ["1", "2", "3"]
        assert records[0].type is AutomationType.ROBOT
        assert records[1].status is AutomationStatus.INACTIVE
        assert records[2].creation_time.year == 2023

    async def test_rereads_the_file_each_call(self, repository, snapshot_file, sample_docs):
        await repository.list_automations()
        snapshot_file.write_text(json.dumps(sample_docs[:1]), encoding="utf-8")

        records = await repository.list_automations()

        assert [record.id for record in records] == ["1"]

    async def test_missing_fields_load_as_none(self, tmp_path):
        path = tmp_path / "partial.json"
        path.write_text(json.dumps([{"id": "9"}]), encoding="utf-8")

        records = await AutomationRepository(data_file=path).list_automations()

        assert records[0].name is None
        assert records[0].status is None

    async def test_missing_file_raises_source_unavailable(self, tmp_path):
        repository = AutomationRepository(data_file=tmp_path / "absent.json")

        with pytest.raises(SourceUnavailableError) as exc_info:
            await repository.list_automations()

        assert "No such file" in exc_info.value.message

    async def test_invalid_json_raises_source_unavailable(self, snapshot_file, repository):
        snapshot_file.write_text("{broken", encoding="utf-8")

        with pytest.raises(SourceUnavailableError):
            await repository.list_automations()

    async def test_invalid_record_raises_source_unavailable(self, snapshot_file, repository):
        snapshot_file.write_text(
            json.dumps([{"id": "1", "type": "spaceship"}]), encoding="utf-8"
        )

        with pytest.raises(SourceUnavailableError) as exc_info:
            await repository.list_automations()

        assert "type" in exc_info.value.message


class TestSourceUnavailableError:
    def test_uses_class_name_when_error_has_no_text(self):
        error = SourceUnavailableError.from_exception(OSError())

        assert error.message == "OSError"
