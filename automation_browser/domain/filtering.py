"""
Record filtering.

Every filter must hold for a record to be kept (logical AND). Matching
rules per field:
  - name:         case-insensitive substring
  - type, status: exact, case-sensitive match on the string form
  - creationTime: substring of the record's UTC date (YYYY-MM-DD), so
                  "2023" or "2023-01" match a whole year or month

A record with no value for a filtered field never matches.
"""

from typing import Callable, Mapping, Sequence

from automation_browser.domain.models import Automation, AutomationField

Predicate = Callable[[str, str], bool]


def _contains_ignore_case(value: str, wanted: str) -> bool:
    return wanted.casefold() in value.casefold()


def _equals(value: str, wanted: str) -> bool:
    return value == wanted


def _contains(value: str, wanted: str) -> bool:
    return wanted in value


_PREDICATES: dict[AutomationField, Predicate] = {
    AutomationField.NAME: _contains_ignore_case,
    AutomationField.TYPE: _equals,
    AutomationField.STATUS: _equals,
    AutomationField.CREATION_TIME: _contains,
}


def matches(record: Automation, filters: Mapping[str, str]) -> bool:
    """Return True when ``record`` satisfies every filter."""
    for key, wanted in filters.items():
        if not wanted:
            continue
        field = AutomationField.lookup(key)
        if field is None or field not in _PREDICATES:
            continue
        value = field.text_of(record)
        if value is None:
            return False
        if not _PREDICATES[field](value, wanted):
            return False
    return True


def filter_automations(
    records: Sequence[Automation], filters: Mapping[str, str]
) -> list[Automation]:
    """
    Keep the records matching all filters, in their original order.

    An empty filter mapping returns the records unchanged.
    """
    if not filters:
        return list(records)
    return [record for record in records if matches(record, filters)]
