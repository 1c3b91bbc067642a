"""
Custom application exceptions.

Centralised exception definitions for clean error handling
across all layers of the application.
"""

INVALID_PAGINATION_MESSAGE = (
    "Invalid pagination parameters. "
    "Page must be >= 1, limit must be between 1 and 50000"
)
INVALID_SORT_ORDER_MESSAGE = 'Invalid sort order. Must be "asc" or "desc"'
FETCH_FALLBACK_MESSAGE = "Failed to fetch automations"


class AutomationServiceError(Exception):
    """Base exception for the automation browser."""

    def __init__(self, message: str = "An unexpected error occurred"):
        self.message = message
        super().__init__(self.message)


class QueryError(AutomationServiceError):
    """
    Raised when a listing query cannot produce a result.

    Carries the HTTP status code the API layer answers with.
    """

    status_code = 500


class InvalidPaginationError(QueryError):
    """Page is below 1, limit is outside [1, 50000], or either is not an integer."""

    status_code = 400

    def __init__(self, page: str | None = None, limit: str | None = None):
        self.page = page
        self.limit = limit
        super().__init__(INVALID_PAGINATION_MESSAGE)


class InvalidSortOrderError(QueryError):
    """Sort order is neither "asc" nor "desc"."""

    status_code = 400

    def __init__(self, sort_order: str | None = None):
        self.sort_order = sort_order
        super().__init__(INVALID_SORT_ORDER_MESSAGE)


class SourceUnavailableError(QueryError):
    """
    Raised when the record snapshot cannot be read or parsed.

    The message is the underlying failure text so callers see the real cause.
    """

    status_code = 500

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)

    @classmethod
    def from_exception(cls, exc: Exception) -> "SourceUnavailableError":
        return cls(str(exc) or exc.__class__.__name__)


class GatewayError(AutomationServiceError):
    """Raised by the client gateway; the message is ready to show in the UI."""

    def __init__(self, message: str = FETCH_FALLBACK_MESSAGE, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message or FETCH_FALLBACK_MESSAGE)
