"""
Automation data loader for the table view.

Tracks the current page (data / loading / error) and, separately, a
one-time list of every automation used to fill the filter dropdowns.

Only the most recent page request may change the state: a response
that arrives after a newer request was started is dropped.
"""

from typing import Optional

from automation_browser.client.gateway import AutomationsGateway
from automation_browser.core.config import settings
from automation_browser.core.exceptions import GatewayError
from automation_browser.core.logging import get_logger
from automation_browser.domain.models import Automation, PageResult, QueryDescriptor

logger = get_logger(__name__)


class AutomationsLoader:
    """Page and filter-option state fed by an AutomationsGateway."""

    def __init__(self, gateway: AutomationsGateway) -> None:
        self._gateway = gateway
        self._query: Optional[QueryDescriptor] = None
        self._latest_request = 0
        self.data: Optional[PageResult] = None
        self.loading = False
        self.error: Optional[str] = None
        self.all_automations: list[Automation] = []

    @property
    def query(self) -> Optional[QueryDescriptor]:
        return self._query

    async def load(self, query: QueryDescriptor) -> Optional[PageResult]:
        """
        Fetch the page for ``query`` and make it current.

        Returns:
            The page, or None if the request failed or was superseded.
        """
        self._query = query
        self._latest_request += 1
        request_id = self._latest_request

        self.loading = True
        self.error = None
        try:
            result = await self._gateway.get_automations(query)
        except GatewayError as exc:
            if request_id == self._latest_request:
                logger.error("Failed to load automations: %s", exc.message)
                self.error = exc.message
            return None
        finally:
            if request_id == self._latest_request:
                self.loading = False

        if request_id != self._latest_request:
            logger.debug("Dropping stale response for request %d", request_id)
            return None

        self.data = result
        return result

    async def refetch(self) -> Optional[PageResult]:
        """Reload the page for the last requested descriptor."""
        if self._query is None:
            raise RuntimeError("Nothing to refetch: load() has not been called yet.")
        return await self.load(self._query)

    async def load_filter_options(self) -> list[Automation]:
        """
        Fetch every automation once for the filter dropdowns.

        The list is cached for the loader's lifetime and never refetched
        once non-empty. A failure leaves it empty.
        """
        if self.all_automations:
            return self.all_automations

        query = QueryDescriptor(page=1, limit=settings.filter_options_limit)
        try:
            result = await self._gateway.get_automations(query)
        except GatewayError as exc:
            logger.error("Failed to load automations for filters: %s", exc.message)
            self.all_automations = []
            return self.all_automations

        self.all_automations = list(result.data)
        return self.all_automations
