"""
The automation listing query pipeline.

Runs one listing request end to end:
  1. Normalise and validate the raw parameters
  2. Load the full snapshot from the repository
  3. Filter, then sort, then slice one page
  4. Return the page with the applied filters and sorting echoed back

Validation and snapshot failures abort the request; the later stages
cannot fail once the parameters are valid.
"""

from typing import Mapping, Optional

from automation_browser.core.logging import get_logger
from automation_browser.domain.filtering import filter_automations
from automation_browser.domain.models import (
    PageResult,
    Pagination,
    QueryDescriptor,
    Sorting,
)
from automation_browser.domain.pagination import paginate
from automation_browser.domain.query_normalizer import normalize_query
from automation_browser.domain.sorting import sort_automations
from automation_browser.infrastructure.storage.json_repository import (
    AutomationRepository,
)

logger = get_logger(__name__)


class AutomationService:
    """Business logic for the automation listing."""

    def __init__(self, repository: AutomationRepository) -> None:
        self._repo = repository

    async def get_automations(
        self, params: Mapping[str, Optional[str]]
    ) -> PageResult:
        """
        Run the listing pipeline for a raw parameter bag.

        Args:
            params: Query parameters exactly as received.

        Returns:
            The requested page of automations.

        Raises:
            InvalidPaginationError: page/limit invalid.
            InvalidSortOrderError: sortOrder invalid.
            SourceUnavailableError: the snapshot could not be loaded.
        """
        query = normalize_query(params)
        return await self.execute(query)

    async def execute(self, query: QueryDescriptor) -> PageResult:
        """Run the pipeline for an already validated descriptor."""
        records = await self._repo.list_automations()

        filtered = filter_automations(records, query.filters)
        ordered = sort_automations(filtered, query.sort_by, query.sort_order)
        page = paginate(ordered, query.page, query.limit)

        logger.info(
            "Listed automations (filters=%s, sortBy=%s, sortOrder=%s, "
            "page=%d, limit=%d): %d of %d matching",
            query.filters,
            query.sort_by,
            query.sort_order.value,
            query.page,
            query.limit,
            len(page.items),
            page.total_items,
        )

        return PageResult(
            data=page.items,
            pagination=Pagination(
                current_page=page.current_page,
                total_pages=page.total_pages,
                total_items=page.total_items,
                items_per_page=page.items_per_page,
            ),
            filters=dict(query.filters),
            sorting=Sorting(sort_by=query.sort_by, sort_order=query.sort_order),
        )
