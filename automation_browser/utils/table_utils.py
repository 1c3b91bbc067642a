"""
Table display helpers.

Builds filter dropdown options from a record list and formats values
and headers for display.
"""

import re
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Sequence

from automation_browser.domain.models import Automation, AutomationField, to_utc


@dataclass(frozen=True)
class UniqueValues:
    """Distinct option values per filterable column."""

    names: list[str] = field(default_factory=list)
    types: list[str] = field(default_factory=list)
    statuses: list[str] = field(default_factory=list)
    creation_times: list[str] = field(default_factory=list)


def extract_unique_values(
    records: Sequence[Automation], field_: AutomationField
) -> list[str]:
    """
    Return the sorted distinct string forms of ``field_`` across ``records``.

    Creation times are reduced to their date (YYYY-MM-DD); records without
    a value for the field are skipped.
    """
    values = {field_.text_of(record) for record in records}
    values.discard(None)
    return sorted(values)


def extract_all_unique_values(records: Sequence[Automation]) -> UniqueValues:
    return UniqueValues(
        names=extract_unique_values(records, AutomationField.NAME),
        types=extract_unique_values(records, AutomationField.TYPE),
        statuses=extract_unique_values(records, AutomationField.STATUS),
        creation_times=extract_unique_values(records, AutomationField.CREATION_TIME),
    )


def get_filter_options(values: UniqueValues, field_: AutomationField) -> list[str]:
    """Options for a column's filter dropdown; empty for unfilterable columns."""
    options = {
        AutomationField.NAME: values.names,
        AutomationField.STATUS: values.statuses,
        AutomationField.TYPE: values.types,
        AutomationField.CREATION_TIME: values.creation_times,
    }
    return list(options.get(field_, []))


def format_cell_value(value: Any, field_: AutomationField) -> str:
    """Render a cell; creation times show as a US-style date (M/D/YYYY)."""
    if value is None:
        return ""
    if field_ is AutomationField.CREATION_TIME and isinstance(value, datetime):
        day = to_utc(value).date()
        return f"{day.month}/{day.day}/{day.year}"
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def capitalize_first(text: str) -> str:
    return text[:1].upper() + text[1:]


def to_title_case(text: str) -> str:
    """
    Turn a camelCase name into a spaced title.

    Every capital gets a space in front of it, so a leading capital
    produces a leading space: "creationTime" -> "Creation Time",
    "XMLHttp" -> " X M L Http".
    """
    return capitalize_first(re.sub(r"([A-Z])", r" \1", text))
