"""Page slicing and page metadata."""

import math
from dataclasses import dataclass
from typing import Generic, Sequence, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    """One slice of a sequence plus the numbers needed to describe it."""

    items: list[T]
    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int


def paginate(items: Sequence[T], page: int, limit: int) -> Page[T]:
    """
    Return page ``page`` (1-based) of ``items`` with ``limit`` items per page.

    A page past the end yields an empty slice; ``current_page`` is echoed
    back unchanged.
    """
    total_items = len(items)
    start = (page - 1) * limit
    return Page(
        items=list(items[start:start + limit]),
        current_page=page,
        total_pages=math.ceil(total_items / limit),
        total_items=total_items,
        items_per_page=limit,
    )
