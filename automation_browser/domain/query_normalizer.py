"""
Query normalisation.

Turns the raw query-string parameters of a listing request into a
validated QueryDescriptor. Values arrive exactly as the client sent them
(strings or missing); nothing upstream coerces them.

Pagination is validated strictly: anything that is not a base-10 integer
is rejected, never silently replaced with a default.
"""

import re
from typing import Mapping, Optional

from automation_browser.core.config import settings
from automation_browser.core.exceptions import (
    InvalidPaginationError,
    InvalidSortOrderError,
)
from automation_browser.domain.models import (
    FILTERABLE_FIELDS,
    QueryDescriptor,
    SortOrder,
)

_INTEGER_PATTERN = re.compile(r"^[+-]?\d+$", re.ASCII)


def parse_int(raw: Optional[str], default: int) -> Optional[int]:
    """
    Parse a base-10 integer, falling back to ``default`` when absent or blank.

    Returns None for text that is not an integer ("abc", "1.5", "10px")
    or has more digits than int() will convert.
    """
    text = (raw or "").strip()
    if not text:
        return default
    if not _INTEGER_PATTERN.match(text):
        return None
    try:
        return int(text)
    except ValueError:
        return None


def is_valid_pagination(page: Optional[int], limit: Optional[int]) -> bool:
    if page is None or limit is None:
        return False
    return page >= 1 and 1 <= limit <= settings.max_limit


def parse_sort_order(raw: Optional[str]) -> Optional[SortOrder]:
    """Return the sort order for ``raw`` (asc when absent or blank), or None if invalid."""
    if not raw:
        return SortOrder.ASC
    try:
        return SortOrder(raw)
    except ValueError:
        return None


def collect_filters(params: Mapping[str, Optional[str]]) -> dict[str, str]:
    """Pick the filterable fields that carry a non-blank value, trimmed."""
    filters: dict[str, str] = {}
    for field in FILTERABLE_FIELDS:
        value = params.get(field.value)
        if value is None:
            continue
        value = value.strip()
        if value:
            filters[field.value] = value
    return filters


def normalize_query(params: Mapping[str, Optional[str]]) -> QueryDescriptor:
    """
    Validate a raw parameter bag and build a QueryDescriptor.

    Keys other than page, limit, sortBy, sortOrder and the filterable
    fields are ignored.

    Args:
        params: Raw query parameters, values as strings or None.

    Returns:
        The validated QueryDescriptor.

    Raises:
        InvalidPaginationError: page/limit is not an integer or out of range.
        InvalidSortOrderError: sortOrder is neither "asc" nor "desc".
    """
    raw_page = params.get("page")
    raw_limit = params.get("limit")
    page = parse_int(raw_page, settings.default_page)
    limit = parse_int(raw_limit, settings.default_limit)

    if not is_valid_pagination(page, limit):
        raise InvalidPaginationError(raw_page, raw_limit)

    raw_sort_order = params.get("sortOrder")
    sort_order = parse_sort_order(raw_sort_order)
    if sort_order is None:
        raise InvalidSortOrderError(raw_sort_order)

    return QueryDescriptor(
        page=page,
        limit=limit,
        sort_by=params.get("sortBy") or None,
        sort_order=sort_order,
        filters=collect_filters(params),
    )
