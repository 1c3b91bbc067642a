"""
API response schemas.

Listing responses use the domain PageResult directly (it is already the
public contract). Errors share one body shape.
"""

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Standard error response."""

    message: str = Field(..., description="Error description")
