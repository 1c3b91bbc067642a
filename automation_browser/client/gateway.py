"""
HTTP gateway to the automation listing API.

Uses httpx.AsyncClient with a configurable base URL and timeout. Every
failure is raised as a GatewayError whose message is ready for display,
chosen in this order:
  1. the "message" field of the server's JSON error body
  2. the transport error's own text
  3. a fixed fallback
"""

from typing import Any, Optional

import httpx
from pydantic import ValidationError

from automation_browser.core.config import settings
from automation_browser.core.exceptions import FETCH_FALLBACK_MESSAGE, GatewayError
from automation_browser.core.logging import get_logger
from automation_browser.domain.models import PageResult, QueryDescriptor

logger = get_logger(__name__)

AUTOMATIONS_PATH = "automations"


def descriptor_to_params(query: QueryDescriptor) -> dict[str, str]:
    """Flatten a descriptor into the endpoint's query parameters."""
    params = {
        "page": str(query.page),
        "limit": str(query.limit),
        "sortOrder": query.sort_order.value,
    }
    if query.sort_by:
        params["sortBy"] = query.sort_by
    params.update(query.filters)
    return params


def _server_message(response: httpx.Response) -> Optional[str]:
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return None


class AutomationsGateway:
    """Async client for ``GET /automations``."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._base_url = (base_url or settings.server_url).rstrip("/")
        self._timeout = httpx.Timeout(timeout or settings.http_timeout)
        self._transport = transport

    @property
    def base_url(self) -> str:
        return self._base_url

    async def get(self, path: str, params: Optional[dict[str, Any]] = None) -> Any:
        """
        Send a GET request and return the decoded JSON body.

        Raises:
            GatewayError: On transport failure, non-2xx status or a
                non-JSON body.
        """
        url = f"{self._base_url}/{path}"
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.get(url, params=params)
                response.raise_for_status()
                return response.json()

        except httpx.HTTPStatusError as exc:
            message = _server_message(exc.response) or str(exc) or FETCH_FALLBACK_MESSAGE
            logger.warning(
                "Request to %s failed with HTTP %d: %s",
                url,
                exc.response.status_code,
                message,
            )
            raise GatewayError(message, status_code=exc.response.status_code) from exc

        except httpx.HTTPError as exc:
            logger.warning("Request to %s failed: %s", url, exc)
            raise GatewayError(str(exc) or FETCH_FALLBACK_MESSAGE) from exc

        except ValueError as exc:
            logger.warning("Response from %s is not JSON: %s", url, exc)
            raise GatewayError(FETCH_FALLBACK_MESSAGE) from exc

    async def get_automations(self, query: QueryDescriptor) -> PageResult:
        """
        Fetch one page of automations for ``query``.

        Raises:
            GatewayError: If the request fails or the body is not a page result.
        """
        body = await self.get(AUTOMATIONS_PATH, params=descriptor_to_params(query))
        try:
            return PageResult.model_validate(body)
        except ValidationError as exc:
            logger.warning("Unexpected listing response shape: %s", exc)
            raise GatewayError(FETCH_FALLBACK_MESSAGE) from exc
