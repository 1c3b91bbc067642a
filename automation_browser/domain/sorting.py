"""
Single-key record sorting.

Rules:
  - no sort field: records come back in input order
  - unknown sort field: same as no sort field
  - records without a value for the sort field always go last,
    for both "asc" and "desc"
  - creationTime sorts chronologically
  - text fields sort by a locale-style collation key (accents and case
    only break ties), not by raw code points
  - the sort is stable in both directions
"""

import unicodedata
from datetime import datetime
from enum import Enum
from typing import Any, Optional, Sequence

from automation_browser.domain.models import (
    Automation,
    AutomationField,
    SortOrder,
    to_utc,
)


def collation_key(text: str) -> tuple[str, str, str]:
    """
    Build a three-level sort key approximating locale-aware ordering.

    Primary: base letters, case-folded, accents stripped.
    Secondary: accented form. Tertiary: lower case before upper case.
    """
    decomposed = unicodedata.normalize("NFKD", text)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold(), decomposed.casefold(), text.swapcase()


def sort_key(value: Any) -> Any:
    if isinstance(value, datetime):
        return to_utc(value).timestamp()
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, str):
        return collation_key(value)
    return value


def sort_automations(
    records: Sequence[Automation],
    sort_by: Optional[str],
    sort_order: SortOrder = SortOrder.ASC,
) -> list[Automation]:
    """
    Sort records on one field.

    Args:
        records: Records to sort (not modified).
        sort_by: Field name; None or an unknown name leaves the order as is.
        sort_order: Direction applied to records that have a value.

    Returns:
        A new list in sorted order.
    """
    field = AutomationField.lookup(sort_by) if sort_by else None
    if field is None:
        return list(records)

    present = [record for record in records if field.value_of(record) is not None]
    missing = [record for record in records if field.value_of(record) is None]

    # sorted() keeps equal keys in input order even with reverse=True
    ordered = sorted(
        present,
        key=lambda record: sort_key(field.value_of(record)),
        reverse=sort_order == SortOrder.DESC,
    )
    return ordered + missing
