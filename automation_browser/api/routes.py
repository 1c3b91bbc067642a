"""
API routes for the automation listing.

Query parameters are declared as optional strings so they reach the
service exactly as sent; validation belongs to the query pipeline,
not to FastAPI's coercion.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from automation_browser.api.dependencies import get_automation_service
from automation_browser.api.schemas import ErrorResponse
from automation_browser.core.logging import get_logger
from automation_browser.domain.automation_service import AutomationService
from automation_browser.domain.models import PageResult

logger = get_logger(__name__)

router = APIRouter(prefix="/automations", tags=["Automations"])


@router.get(
    "",
    response_model=PageResult,
    summary="List automations",
    description=(
        "Returns one page of automations after applying the optional "
        "filters and a single-field sort."
    ),
    responses={
        400: {"model": ErrorResponse, "description": "Invalid pagination or sort order"},
        500: {"model": ErrorResponse, "description": "Snapshot unavailable"},
    },
)
async def list_automations(
    page: Optional[str] = Query(None, description="Page number, 1-based"),
    limit: Optional[str] = Query(None, description="Page size, 1 to 50000"),
    sort_by: Optional[str] = Query(None, alias="sortBy", description="Field to sort on"),
    sort_order: Optional[str] = Query(
        None, alias="sortOrder", description='"asc" (default) or "desc"'
    ),
    name: Optional[str] = Query(None, description="Case-insensitive name substring"),
    type: Optional[str] = Query(None, description="Exact automation type"),
    status: Optional[str] = Query(None, description="Exact automation status"),
    creation_time: Optional[str] = Query(
        None, alias="creationTime", description="Substring of the creation date"
    ),
    service: AutomationService = Depends(get_automation_service),
) -> PageResult:
    """
    One page of automations, filtered and sorted as requested.

    Pipeline errors propagate to the application's QueryError handler,
    which answers with ``{"message": ...}``.
    """
    params = {
        "page": page,
        "limit": limit,
        "sortBy": sort_by,
        "sortOrder": sort_order,
        "name": name,
        "type": type,
        "status": status,
        "creationTime": creation_time,
    }
    present = {key: value for key, value in params.items() if value is not None}
    return await service.get_automations(present)
