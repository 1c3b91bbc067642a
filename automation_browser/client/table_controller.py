"""
Automation table controller.

Headless counterpart of the table view: turns header clicks, filter
picks and pagination controls into URL-synchronised query changes,
and reloads data whenever the query changes (including back/forward
navigation).

Must be used from inside a running event loop; reloads are scheduled
as tasks and ``settle()`` waits for them.
"""

import asyncio
from dataclasses import dataclass
from typing import Optional

from automation_browser.client.loader import AutomationsLoader
from automation_browser.client.table_config import AUTOMATION_COLUMNS, ColumnConfig
from automation_browser.client.url_state import UrlStateSynchronizer
from automation_browser.core.logging import get_logger
from automation_browser.domain.models import (
    AutomationField,
    QueryDescriptor,
    SortOrder,
)
from automation_browser.utils.table_utils import (
    extract_all_unique_values,
    format_cell_value,
    get_filter_options,
    to_title_case,
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class PaginationSummary:
    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int
    start_item: int
    end_item: int

    @property
    def label(self) -> str:
        return f"{self.start_item}-{self.end_item} of {self.total_items}"

    @property
    def show_page_links(self) -> bool:
        return self.total_pages > 1


class AutomationsTableController:
    """Interaction logic of the automation table."""

    def __init__(
        self,
        synchronizer: UrlStateSynchronizer,
        loader: AutomationsLoader,
        columns: tuple[ColumnConfig, ...] = AUTOMATION_COLUMNS,
    ) -> None:
        self._sync = synchronizer
        self._loader = loader
        self._columns = columns
        self._pending: set[asyncio.Task] = set()
        self._unsubscribe = None

    @property
    def query(self) -> QueryDescriptor:
        return self._sync.query

    @property
    def columns(self) -> tuple[ColumnConfig, ...]:
        return self._columns

    @property
    def loader(self) -> AutomationsLoader:
        return self._loader

    # ── Lifecycle ────────────────────────────────────────────

    async def start(self) -> None:
        """Mount: read the URL, then load the page and filter options together."""
        query = self._sync.mount()
        if self._unsubscribe is None:
            self._unsubscribe = self._sync.subscribe(self._schedule_load)
        await asyncio.gather(
            self._loader.load(query),
            self._loader.load_filter_options(),
        )

    def stop(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self._sync.unmount()

    async def settle(self) -> None:
        """Wait until every scheduled reload has finished."""
        while self._pending:
            await asyncio.gather(*list(self._pending))

    def _schedule_load(self, query: QueryDescriptor) -> None:
        logger.debug("Query changed, reloading page %d", query.page)
        task = asyncio.get_running_loop().create_task(self._loader.load(query))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    # ── User actions ─────────────────────────────────────────

    async def toggle_sort(self, column: str) -> None:
        """Sort on ``column``: ascending first, flipping on repeated clicks."""
        current = self.query
        if current.sort_by == column and current.sort_order == SortOrder.ASC:
            order = SortOrder.DESC
        else:
            order = SortOrder.ASC
        self._sync.update({"sortBy": column, "sortOrder": order})
        await self.settle()

    async def set_filter(self, field: str, value: Optional[str]) -> None:
        """Pick a filter value, or clear it with None."""
        self._sync.update({field: value or None})
        await self.settle()

    async def change_page(self, page: int) -> None:
        self._sync.update({"page": page})
        await self.settle()

    async def change_page_size(self, size: int) -> None:
        self._sync.update({"limit": size, "page": 1})
        await self.settle()

    # ── View data ────────────────────────────────────────────

    def header_label(self, column: ColumnConfig) -> str:
        return to_title_case(column.key)

    def sort_indicator(self, column: str) -> Optional[SortOrder]:
        """Direction arrow to show on ``column``'s header, if it is the sort column."""
        if self.query.sort_by != column:
            return None
        return self.query.sort_order

    def filter_options(self, field: AutomationField) -> list[str]:
        values = extract_all_unique_values(self._loader.all_automations)
        return get_filter_options(values, field)

    def rows(self) -> list[dict[str, str]]:
        """Formatted cells of the current page, keyed by column."""
        if self._loader.data is None:
            return []
        return [
            {
                column.key: format_cell_value(column.field.value_of(record), column.field)
                for column in self._columns
            }
            for record in self._loader.data.data
        ]

    def pagination_summary(self) -> Optional[PaginationSummary]:
        """
        Pagination bar state.

        Page and page size come from the current query so the bar reacts
        before the next response arrives.
        """
        data = self._loader.data
        if data is None:
            return None
        page = self.query.page
        per_page = self.query.limit
        total = data.pagination.total_items
        return PaginationSummary(
            current_page=page,
            total_pages=data.pagination.total_pages,
            total_items=total,
            items_per_page=per_page,
            start_item=0 if total == 0 else (page - 1) * per_page + 1,
            end_item=min(page * per_page, total),
        )

    def status_message(self) -> Optional[str]:
        """Text shown instead of the table, or None when the table renders."""
        if self._loader.loading:
            return "Loading..."
        if self._loader.error:
            return f"Error loading automations: {self._loader.error}"
        if self._loader.data is None:
            return "No data available"
        return None
