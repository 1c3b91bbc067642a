"""
URL state synchronisation for the automation table.

Keeps the page's query string and the in-memory QueryDescriptor in step:
  - mount: the descriptor is read from the current URL
  - user change: the descriptor is updated, then a new history entry
    is pushed (no reload)
  - back/forward: the descriptor is re-read from the URL; nothing is pushed

The browser URL is reached only through the UrlState port, so the
synchroniser runs without a real navigation context.

Parsing here is lenient, unlike the server: malformed or out-of-range
page/limit fall back to their defaults and an unknown sortOrder falls
back to "asc", so the table can always render and never holds a value
the server would reject.
"""

from enum import Enum
from typing import Any, Callable, Mapping, Optional, Protocol
from urllib.parse import parse_qs, urlencode, urlsplit

from automation_browser.core.config import settings
from automation_browser.core.logging import get_logger
from automation_browser.domain.models import (
    FILTERABLE_FIELDS,
    QueryDescriptor,
    SortOrder,
)
from automation_browser.domain.query_normalizer import (
    collect_filters,
    parse_int,
    parse_sort_order,
)

logger = get_logger(__name__)

QueryListener = Callable[[QueryDescriptor], None]
Unsubscribe = Callable[[], None]

FILTER_KEYS = tuple(field.value for field in FILTERABLE_FIELDS)
SORT_KEYS = ("sortBy", "sortOrder")
PAGING_KEYS = ("page", "limit")
QUERY_KEYS = PAGING_KEYS + SORT_KEYS + FILTER_KEYS


# ── Query string codec ───────────────────────────────────────


def parse_query_string(query_string: str) -> QueryDescriptor:
    """Leniently parse a URL query string ("?a=1&b=2" or "a=1&b=2")."""
    values = parse_qs(query_string.lstrip("?"), keep_blank_values=True)
    params = {key: items[0] for key, items in values.items() if items}

    page = parse_int(params.get("page"), settings.default_page)
    if page is None or page < 1:
        page = settings.default_page

    limit = parse_int(params.get("limit"), settings.default_limit)
    if limit is None or not 1 <= limit <= settings.max_limit:
        limit = settings.default_limit

    return QueryDescriptor(
        page=page,
        limit=limit,
        sort_by=params.get("sortBy") or None,
        sort_order=parse_sort_order(params.get("sortOrder")) or SortOrder.ASC,
        filters=collect_filters(params),
    )


def serialize_query(query: QueryDescriptor) -> str:
    """
    Encode a descriptor as a query string without the leading "?".

    page and limit are always present; sortOrder is written alongside
    sortBy or when it differs from "asc"; empty filters are left out.
    """
    pairs: list[tuple[str, str]] = [
        ("page", str(query.page)),
        ("limit", str(query.limit)),
    ]
    if query.sort_by:
        pairs.append(("sortBy", query.sort_by))
    if query.sort_by or query.sort_order != SortOrder.ASC:
        pairs.append(("sortOrder", query.sort_order.value))
    for key in FILTER_KEYS:
        value = query.filters.get(key)
        if value:
            pairs.append((key, value))
    return urlencode(pairs)


def merge_query(query: QueryDescriptor, changes: Mapping[str, Any]) -> QueryDescriptor:
    """
    Apply partial changes to a descriptor.

    A change to any sort or filter key sends the table back to page 1.
    A filter value of None or "" clears that filter.

    Raises:
        ValueError: For an unknown key or a value outside the valid range.
    """
    unknown = set(changes) - set(QUERY_KEYS)
    if unknown:
        raise ValueError(f"Unknown query keys: {sorted(unknown)}")

    page = changes.get("page", query.page)
    limit = changes.get("limit", query.limit)
    sort_by = changes.get("sortBy", query.sort_by)
    sort_order = changes.get("sortOrder", query.sort_order)

    filters = dict(query.filters)
    for key in FILTER_KEYS:
        if key not in changes:
            continue
        value = changes[key]
        if value is None or not str(value).strip():
            filters.pop(key, None)
        else:
            filters[key] = str(value).strip()

    if any(key in changes for key in SORT_KEYS + FILTER_KEYS):
        page = 1

    return QueryDescriptor(
        page=page,
        limit=limit,
        sort_by=sort_by or None,
        sort_order=sort_order or SortOrder.ASC,
        filters=filters,
    )


# ── Port and in-memory history ───────────────────────────────


class UrlState(Protocol):
    """Access to the navigable URL's query state."""

    def read(self) -> QueryDescriptor: ...

    def write(self, query: QueryDescriptor) -> None: ...

    def on_change(self, callback: QueryListener) -> Unsubscribe: ...


class MemoryHistory:
    """
    In-memory stand-in for a browser's session history.

    ``push_state`` adds an entry and drops any forward entries; ``back``
    and ``forward`` move through entries and notify pop-state listeners,
    as the browser does for history navigation.
    """

    def __init__(self, initial_location: str = "/") -> None:
        self._entries: list[str] = [initial_location]
        self._index = 0
        self._listeners: list[Callable[[], None]] = []

    @property
    def location(self) -> str:
        return self._entries[self._index]

    @property
    def pathname(self) -> str:
        return urlsplit(self.location).path or "/"

    @property
    def search(self) -> str:
        query = urlsplit(self.location).query
        return f"?{query}" if query else ""

    @property
    def length(self) -> int:
        return len(self._entries)

    def push_state(self, location: str) -> None:
        del self._entries[self._index + 1:]
        self._entries.append(location)
        self._index += 1

    def back(self) -> None:
        self.go(-1)

    def forward(self) -> None:
        self.go(1)

    def go(self, delta: int) -> None:
        target = self._index + delta
        if delta == 0 or not 0 <= target < len(self._entries):
            return
        self._index = target
        for listener in list(self._listeners):
            listener()

    def add_pop_state_listener(self, listener: Callable[[], None]) -> Unsubscribe:
        self._listeners.append(listener)

        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove


class HistoryUrlState:
    """UrlState backed by a MemoryHistory (or anything with the same API)."""

    def __init__(self, history: MemoryHistory) -> None:
        self._history = history

    def read(self) -> QueryDescriptor:
        return parse_query_string(self._history.search)

    def write(self, query: QueryDescriptor) -> None:
        search = serialize_query(query)
        location = self._history.pathname + (f"?{search}" if search else "")
        self._history.push_state(location)
        logger.debug("Pushed history entry %s", location)

    def on_change(self, callback: QueryListener) -> Unsubscribe:
        return self._history.add_pop_state_listener(lambda: callback(self.read()))


# ── Synchroniser ─────────────────────────────────────────────


class SyncState(str, Enum):
    IDLE = "idle"
    RECONCILING = "reconciling"


class UrlStateSynchronizer:
    """
    Owns the table's current QueryDescriptor and mirrors it into the URL.

    Listeners registered with ``subscribe`` are told about every new
    descriptor after the URL already reflects it, so any request they
    start matches the URL the user sees.
    """

    def __init__(self, url_state: UrlState) -> None:
        self._url_state = url_state
        self._query = QueryDescriptor()
        self._state = SyncState.IDLE
        self._listeners: list[QueryListener] = []
        self._unsubscribe: Optional[Unsubscribe] = None

    @property
    def query(self) -> QueryDescriptor:
        return self._query

    @property
    def state(self) -> SyncState:
        return self._state

    @property
    def mounted(self) -> bool:
        return self._unsubscribe is not None

    def subscribe(self, listener: QueryListener) -> Unsubscribe:
        self._listeners.append(listener)

        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove

    def mount(self) -> QueryDescriptor:
        """Read the initial descriptor from the URL and start following navigation."""
        if self._unsubscribe is None:
            self._unsubscribe = self._url_state.on_change(self._on_navigation)
        self._query = self._url_state.read()
        return self._query

    def unmount(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def update(self, changes: Mapping[str, Any]) -> QueryDescriptor:
        """
        Apply a user-driven change and push it as a new history entry.

        Raises:
            ValueError: If the change holds an unknown key or invalid value;
                neither the descriptor nor the URL is touched in that case.
            Exception: Whatever the UrlState write raises; the descriptor
                is left unchanged so it still matches the URL.
        """
        merged = merge_query(self._query, changes)
        self._state = SyncState.RECONCILING
        try:
            self._url_state.write(merged)
            self._query = merged
        finally:
            self._state = SyncState.IDLE
        self._notify()
        return merged

    def _on_navigation(self, query: QueryDescriptor) -> None:
        self._state = SyncState.RECONCILING
        try:
            self._query = query
        finally:
            self._state = SyncState.IDLE
        logger.debug("History navigation restored query %s", query)
        self._notify()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self._query)
