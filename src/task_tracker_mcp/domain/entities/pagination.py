"""
Pagination.

``paginate`` slices a filtered, sorted source into one page and reports the
totals needed to navigate the rest. The source only has to count its items
and fetch a window of them, so the same math serves in-memory sequences and
database queries.
"""

import math
from dataclasses import dataclass, field
from typing import (
    Any,
    Callable,
    Dict,
    Generic,
    List,
    Optional,
    Protocol,
    Sequence,
    TypeVar,
)

T = TypeVar("T")
U = TypeVar("U")
T_co = TypeVar("T_co", covariant=True)


class PageSource(Protocol[T_co]):
    """A countable, sliceable source of ordered items."""

    def count(self) -> int:
        """Total number of items matching the source's predicate."""
        ...

    def fetch(self, offset: int, limit: int) -> Sequence[T_co]:
        """Items in ``[offset, offset + limit)`` in the source's order."""
        ...


class SequencePageSource(Generic[T]):
    """PageSource over an already filtered and sorted in-memory sequence."""

    def __init__(self, items: Sequence[T]):
        self._items = items

    def count(self) -> int:
        return len(self._items)

    def fetch(self, offset: int, limit: int) -> Sequence[T]:
        return self._items[offset : offset + limit]


@dataclass
class PaginatedList(Generic[T]):
    """One page of a larger result set plus the metadata to navigate it."""

    items: List[T] = field(default_factory=list)
    page: int = 1
    page_size: int = 20
    total_count: int = 0

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_count / self.page_size)

    @property
    def has_previous_page(self) -> bool:
        return self.page > 1

    @property
    def has_next_page(self) -> bool:
        return self.page < self.total_pages

    def to_dict(self, serialize: Optional[Callable[[T], Any]] = None) -> Dict[str, Any]:
        """Convert page to dictionary, serializing each item with ``serialize``."""
        items = [serialize(item) for item in self.items] if serialize else list(self.items)
        return {
            "items": items,
            "page": self.page,
            "page_size": self.page_size,
            "total_count": self.total_count,
            "total_pages": self.total_pages,
            "has_previous_page": self.has_previous_page,
            "has_next_page": self.has_next_page,
        }


def paginate(
    source: PageSource[T],
    page: int,
    page_size: int,
    project: Optional[Callable[[T], U]] = None,
) -> PaginatedList[Any]:
    """
    Build one page from ``source``.

    Args:
        source: Filtered and sorted items to page through.
        page: 1-based page number.
        page_size: Maximum number of items per page.
        project: Optional mapping applied to each item on the page.

    Returns:
        PaginatedList for ``page``. Pages past the end are empty but keep
        the real totals.

    Raises:
        ValueError: If ``page`` or ``page_size`` is less than 1.
    """
    if page < 1:
        raise ValueError("Page must be at least 1")
    if page_size < 1:
        raise ValueError("Page size must be at least 1")

    total_count = source.count()
    total_pages = math.ceil(total_count / page_size)

    if page > total_pages:
        items: List[Any] = []
    else:
        window = source.fetch((page - 1) * page_size, page_size)
        items = [project(item) for item in window] if project else list(window)

    return PaginatedList(items=items, page=page, page_size=page_size, total_count=total_count)
