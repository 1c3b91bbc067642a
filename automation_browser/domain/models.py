"""
Domain models for the automation browser.

These models represent the listing's core entities and are shared by
the server pipeline, the API layer and the headless client.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AutomationType(str, Enum):
    ROBOT = "robot"
    FLOW = "flow"
    APPLICATION = "application"


class AutomationStatus(str, Enum):
    ACTIVE = "active"
    DELETED = "deleted"
    INACTIVE = "inactive"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class Automation(BaseModel):
    """
    One automation record as stored in the snapshot.

    Immutable once loaded. Every field except ``id`` may be missing in the
    snapshot, in which case it is ``None`` and the record never matches a
    filter on that field and sorts last on it.
    """

    id: str = Field(..., description="Unique record identifier")
    name: Optional[str] = Field(None, description="Display name")
    type: Optional[AutomationType] = Field(None, description="Automation category")
    creation_time: Optional[datetime] = Field(
        None, alias="creationTime", description="When the automation was created"
    )
    status: Optional[AutomationStatus] = Field(None, description="Lifecycle status")

    model_config = ConfigDict(frozen=True, populate_by_name=True)


def to_utc(value: datetime) -> datetime:
    """Treat naive timestamps as UTC and convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class AutomationField(str, Enum):
    """
    Closed set of record fields the listing can sort or filter on.

    Each member knows how to read its value from a record, so callers never
    index records by arbitrary strings.
    """

    ID = "id"
    NAME = "name"
    STATUS = "status"
    CREATION_TIME = "creationTime"
    TYPE = "type"

    @classmethod
    def lookup(cls, name: Optional[str]) -> Optional["AutomationField"]:
        """Return the field called ``name``, or None when there is no such field."""
        try:
            return cls(name)
        except ValueError:
            return None

    def value_of(self, record: Automation) -> Any:
        return _ACCESSORS[self](record)

    def text_of(self, record: Automation) -> Optional[str]:
        """String form of the field's value, as filters and dropdowns see it."""
        value = self.value_of(record)
        if value is None:
            return None
        if isinstance(value, Enum):
            return value.value
        if isinstance(value, datetime):
            return to_utc(value).date().isoformat()
        return str(value)

    @property
    def filterable(self) -> bool:
        return self in FILTERABLE_FIELDS


_ACCESSORS: dict[AutomationField, Callable[[Automation], Any]] = {
    AutomationField.ID: lambda record: record.id,
    AutomationField.NAME: lambda record: record.name,
    AutomationField.STATUS: lambda record: record.status,
    AutomationField.CREATION_TIME: lambda record: record.creation_time,
    AutomationField.TYPE: lambda record: record.type,
}

# Order matters: this is the order the normalizer collects filters in.
FILTERABLE_FIELDS: tuple[AutomationField, ...] = (
    AutomationField.NAME,
    AutomationField.TYPE,
    AutomationField.STATUS,
    AutomationField.CREATION_TIME,
)


class QueryDescriptor(BaseModel):
    """
    Validated intent of one listing request.

    Field constraints reject any out-of-range value at construction, so a
    descriptor never exists in an invalid state.
    """

    page: int = Field(default=1, ge=1)
    limit: int = Field(default=50, ge=1, le=50000)
    sort_by: Optional[str] = Field(None, alias="sortBy")
    sort_order: SortOrder = Field(default=SortOrder.ASC, alias="sortOrder")
    filters: dict[str, str] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @field_validator("filters")
    @classmethod
    def _only_filterable_fields(cls, value: dict[str, str]) -> dict[str, str]:
        allowed = {field.value for field in FILTERABLE_FIELDS}
        unknown = set(value) - allowed
        if unknown:
            raise ValueError(f"Unknown filter fields: {sorted(unknown)}")
        trimmed = {key: text.strip() for key, text in value.items()}
        return {key: text for key, text in trimmed.items() if text}


class Pagination(BaseModel):
    current_page: int = Field(..., alias="currentPage")
    total_pages: int = Field(..., alias="totalPages")
    total_items: int = Field(..., alias="totalItems")
    items_per_page: int = Field(..., alias="itemsPerPage")

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class Sorting(BaseModel):
    sort_by: Optional[str] = Field(None, alias="sortBy")
    sort_order: SortOrder = Field(default=SortOrder.ASC, alias="sortOrder")

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class PageResult(BaseModel):
    """One page of records plus the metadata the client reconciles against."""

    data: list[Automation] = Field(default_factory=list)
    pagination: Pagination
    filters: dict[str, str] = Field(default_factory=dict)
    sorting: Sorting = Field(default_factory=Sorting)

    model_config = ConfigDict(frozen=True, populate_by_name=True)
