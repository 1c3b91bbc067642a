"""
Unit tests for query normalisation.

Tests cover:
  - Defaults for missing page/limit/sortOrder
  - Strict pagination validation (range and non-numeric input)
  - Sort order validation
  - Filter collection (trimming, blanks, unknown keys)
"""

import pytest

from automation_browser.core.exceptions import (
    InvalidPaginationError,
    InvalidSortOrderError,
)
from automation_browser.domain.models import QueryDescriptor, SortOrder
from automation_browser.domain.query_normalizer import normalize_query, parse_int


class TestNormalizeQuery:
    """Tests for the normalize_query function."""

    def test_empty_params_use_defaults(self):
        query = normalize_query({})

        assert query == QueryDescriptor(page=1, limit=50)
        assert query.sort_by is None
        assert query.sort_order is SortOrder.ASC
        assert query.filters == {}

    def test_parses_all_fields(self):
        query = normalize_query(
            {
                "page": "2",
                "limit": "25",
                "sortBy": "name",
                "sortOrder": "desc",
                "name": "test",
                "type": "robot",
                "status": "active",
                "creationTime": "2023-01",
            }
        )

        assert query.page == 2
        assert query.limit == 25
        assert query.sort_by == "name"
        assert query.sort_order is SortOrder.DESC
        assert query.filters == {
            "name": "test",
            "type": "robot",
            "status": "active",
            "creationTime": "2023-01",
        }

    @pytest.mark.parametrize(
        "params",
        [
            {"page": "0"},
            {"page": "-1"},
            {"limit": "0"},
            {"limit": "50001"},
            {"page": "abc"},
            {"limit": "1.5"},
            {"limit": "10abc"},
            {"page": "9" * 5000},
            {"limit": "1" * 5000},
        ],
    )
    def test_rejects_invalid_pagination(self, params):
        with pytest.raises(InvalidPaginationError) as exc_info:
            normalize_query(params)

        assert exc_info.value.message == (
            "Invalid pagination parameters. "
            "Page must be >= 1, limit must be between 1 and 50000"
        )

    def test_blank_values_count_as_absent(self):
        query = normalize_query({"page": "", "limit": " ", "sortOrder": ""})

        assert query == QueryDescriptor(page=1, limit=50, sort_order=SortOrder.ASC)

    def test_accepts_limit_bounds(self):
        assert normalize_query({"limit": "1"}).limit == 1
        assert normalize_query({"limit": "50000"}).limit == 50000

    def test_pagination_checked_before_sort_order(self):
        """Should report the pagination problem when both are invalid."""
        with pytest.raises(InvalidPaginationError):
            normalize_query({"page": "0", "sortOrder": "sideways"})

    @pytest.mark.parametrize("sort_order", ["invalid", "ASC", "Desc", " asc"])
    def test_rejects_invalid_sort_order(self, sort_order):
        with pytest.raises(InvalidSortOrderError) as exc_info:
            normalize_query({"sortOrder": sort_order})

        assert exc_info.value.message == 'Invalid sort order. Must be "asc" or "desc"'
        assert exc_info.value.status_code == 400

    def test_sort_by_passes_through_unchecked(self):
        assert normalize_query({"sortBy": "unknownField"}).sort_by == "unknownField"

    def test_filters_are_trimmed_and_blanks_dropped(self):
        query = normalize_query({"name": "  robot  ", "status": "   ", "type": ""})

        assert query.filters == {"name": "robot"}

    def test_unknown_keys_are_ignored(self):
        query = normalize_query({"id": "1", "foo": "bar", "name": "x"})

        assert query.filters == {"name": "x"}


class TestParseInt:
    def test_missing_value_uses_default(self):
        assert parse_int(None, 7) == 7

    def test_blank_value_uses_default(self):
        assert parse_int("  ", 7) == 7

    def test_surrounding_whitespace_is_allowed(self):
        assert parse_int(" 12 ", 1) == 12

    @pytest.mark.parametrize("raw", ["abc", "1e3", "0x10", "1.0", "٣"])
    def test_non_integer_text_is_none(self, raw):
        assert parse_int(raw, 1) is None

    def test_too_many_digits_is_none(self):
        """Should not raise when int() refuses to convert a huge digit string."""
        assert parse_int("9" * 5000, 1) is None
