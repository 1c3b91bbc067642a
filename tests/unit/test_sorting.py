"""
Unit tests for record sorting.

Tests cover:
  - Text, date and enum fields in both directions
  - Missing values always last
  - Stability and unknown/absent sort fields
"""

from datetime import datetime, timezone

import pytest

from automation_browser.domain.models import Automation, SortOrder
from automation_browser.domain.sorting import collation_key, sort_automations


def _automation(id, name=None, type=None, created=None, status=None):
    return Automation(
        id=id, name=name, type=type, creation_time=created, status=status
    )


def _ids(records):
    return [record.id for record in records]


class TestSortAutomations:
    """Tests for the sort_automations function."""

    def test_name_ascending(self, sample_automations):
        result = sort_automations(sample_automations, "name", SortOrder.ASC)

        assert [record.name for record in result] == [
            "Another Test",
            "Test Automation 1",
            "Test Automation 2",
        ]

    def test_name_descending(self, sample_automations):
        result = sort_automations(sample_automations, "name", SortOrder.DESC)

        assert [record.name for record in result] == [
            "Test Automation 2",
            "Test Automation 1",
            "Another Test",
        ]

    def test_creation_time_is_chronological(self):
        records = [
            _automation("a", created=datetime(2023, 5, 1, tzinfo=timezone.utc)),
            _automation("b", created=datetime(2021, 12, 31, tzinfo=timezone.utc)),
            _automation("c", created=datetime(2023, 1, 15, tzinfo=timezone.utc)),
        ]

        assert _ids(sort_automations(records, "creationTime")) == ["b", "c", "a"]
        assert _ids(sort_automations(records, "creationTime", SortOrder.DESC)) == [
            "a",
            "c",
            "b",
        ]

    def test_text_ignores_case_and_accents_first(self):
        records = [
            _automation("1", name="beta"),
            _automation("2", name="Alpha"),
            _automation("3", name="Émile"),
            _automation("4", name="delta"),
        ]

        result = sort_automations(records, "name")

        assert [record.name for record in result] == ["Alpha", "beta", "delta", "Émile"]

    def test_no_sort_field_keeps_input_order(self, sample_automations):
        assert sort_automations(sample_automations, None) == sample_automations

    def test_unknown_field_keeps_input_order(self, sample_automations):
        result = sort_automations(sample_automations, "color", SortOrder.DESC)

        assert result == sample_automations

    def test_does_not_modify_input(self, sample_automations):
        original = list(sample_automations)

        sort_automations(sample_automations, "name", SortOrder.DESC)

        assert sample_automations == original

    @pytest.mark.parametrize("order", [SortOrder.ASC, SortOrder.DESC])
    def test_missing_values_sort_last(self, order):
        records = [
            _automation("1"),
            _automation("2", status="inactive"),
            _automation("3"),
            _automation("4", status="active"),
        ]

        result = _ids(sort_automations(records, "status", order))

        assert result[2:] == ["1", "3"]

    @pytest.mark.parametrize("order", [SortOrder.ASC, SortOrder.DESC])
    def test_equal_keys_keep_input_order(self, order):
        records = [
            _automation("1", type="robot"),
            _automation("2", type="flow"),
            _automation("3", type="robot"),
            _automation("4", type="flow"),
            _automation("5", type="robot"),
        ]

        result = _ids(sort_automations(records, "type", order))

        if order is SortOrder.ASC:
            assert result == ["2", "4", "1", "3", "5"]
        else:
            assert result == ["1", "3", "5", "2", "4"]


class TestCollationKey:
    def test_lower_case_before_upper_case_on_tie(self):
        assert collation_key("apple") < collation_key("Apple")

    def test_accent_only_breaks_ties(self):
        assert collation_key("resume") < collation_key("résumé") < collation_key("resumes")
