"""
List View Pipeline
==================
Filter → sort → paginate over a list that was fetched once.

No step here talks to the network; the view is recomputed from
`items` whenever the query, sort key or page changes.

EXAMPLE:
    view = ListView(vehicles, matches=vehicle_matches, page_size=12)
    view.set_query("camry")      # back to page 1
    view.sort_by("price-desc")
    for vehicle in view.rows:
        ...
"""

import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Generic, List, Optional, Sequence, TypeVar, Union

T = TypeVar("T")

EMPTY_MESSAGE = "No results found"

SORT_KEYS = ("price-asc", "price-desc", "date-asc", "date-desc")
SORT_ALIASES = {
    "price-low": "price-asc",
    "price-high": "price-desc",
    "oldest": "date-asc",
    "newest": "date-desc",
}
DEFAULT_SORT = "date-desc"


def normalize_sort_key(sort_key: Optional[str]) -> str:
    """Canonical sort key; unknown keys fall back to newest first."""
    key = SORT_ALIASES.get(sort_key or "", sort_key or "")
    return key if key in SORT_KEYS else DEFAULT_SORT


def _as_number(value: Any) -> Optional[float]:
    try:
        return float(value) if value not in (None, "") else None
    except (TypeError, ValueError):
        return None


def _as_timestamp(value: Any) -> Optional[float]:
    if not isinstance(value, datetime):
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.timestamp()


def sort_items(
    items: Sequence[T],
    sort_key: Optional[str],
    price: Callable[[T], Any] = lambda item: getattr(item, "price", None),
    date: Callable[[T], Any] = lambda item: getattr(item, "listed_at", None),
) -> List[T]:
    """
    Sort by price or date; items without a value go last either way.

    Args:
        items: Rows to sort (not modified)
        sort_key: price-asc / price-desc / date-asc / date-desc or an alias
        price / date: How to read the value from a row
    """
    key = normalize_sort_key(sort_key)
    getter, convert = (price, _as_number) if key.startswith("price") else (date, _as_timestamp)
    descending = key.endswith("desc")

    present, missing = [], []
    for item in items:
        value = convert(getter(item))
        (missing if value is None else present).append((value, item))

    present.sort(key=lambda pair: pair[0], reverse=descending)
    return [item for _, item in present] + [item for _, item in missing]


def page_window(current: int, total: int, max_visible: int = 7) -> List[Union[int, str]]:
    """
    Page numbers for a pager control.

    Up to `max_visible` pages are listed in full; beyond that the first and
    last page frame the neighbours of the current one:
    [1, "...", 4, 5, 6, "...", 20]
    """
    if total <= max_visible:
        return list(range(1, total + 1))

    pages: List[Union[int, str]] = [1]
    if current > 3:
        pages.append("...")
    for p in range(max(2, current - 1), min(total - 1, current + 1) + 1):
        pages.append(p)
    if current < total - 2:
        pages.append("...")
    pages.append(total)
    return pages


@dataclass
class Paginator:
    """Page cursor over `total_items` rows"""
    total_items: int = 0
    page_size: int = 12
    page: int = 1

    @property
    def page_count(self) -> int:
        if self.page_size <= 0:
            return 0
        return math.ceil(self.total_items / self.page_size)

    @property
    def can_prev(self) -> bool:
        return self.page > 1

    @property
    def can_next(self) -> bool:
        return self.page < self.page_count

    def go_to(self, page: int) -> bool:
        """Move to `page`; outside [1, page_count] nothing changes."""
        if page < 1 or page > self.page_count or page == self.page:
            return False
        self.page = page
        return True

    def next(self) -> bool:
        return self.go_to(self.page + 1)

    def prev(self) -> bool:
        return self.go_to(self.page - 1)

    def first(self) -> bool:
        return self.go_to(1)

    def last(self) -> bool:
        return self.go_to(self.page_count)

    def reset(self):
        self.page = 1

    def window(self) -> List[Union[int, str]]:
        return page_window(self.page, self.page_count)

    def slice(self, items: Sequence[T]) -> List[T]:
        start = (self.page - 1) * self.page_size
        return list(items[start:start + self.page_size])


class ListView(Generic[T]):
    """
    Derived, paginated view of an in-memory list.

    Args:
        items: Everything fetched for the screen
        matches: Predicate (item, lower-cased query) -> bool; every item
            matches a blank query
        page_size: Rows per page
        sort_key: Initial sort, None keeps fetch order
        price / date: Value readers used by sorting
    """

    def __init__(
        self,
        items: Sequence[T] = (),
        matches: Optional[Callable[[T, str], bool]] = None,
        page_size: int = 12,
        sort_key: Optional[str] = None,
        price: Optional[Callable[[T], Any]] = None,
        date: Optional[Callable[[T], Any]] = None,
        empty_message: str = EMPTY_MESSAGE,
    ):
        self.items: List[T] = list(items)
        self.matches = matches
        self.sort_key = sort_key
        self.price = price or (lambda item: getattr(item, "price", None))
        self.date = date or (lambda item: getattr(item, "listed_at", None))
        self.query = ""
        self.empty_message = empty_message
        self.paginator = Paginator(page_size=page_size)
        self._recompute()

    def _recompute(self):
        query = self.query.strip().lower()
        if query and self.matches:
            filtered = [item for item in self.items if self.matches(item, query)]
        else:
            filtered = list(self.items)

        if self.sort_key:
            filtered = sort_items(filtered, self.sort_key, price=self.price, date=self.date)

        self.filtered = filtered
        self.paginator.total_items = len(filtered)

    def set_items(self, items: Sequence[T]):
        """Replace the data after a refetch; the page is kept when still valid."""
        self.items = list(items)
        self._recompute()
        if self.paginator.page > max(self.paginator.page_count, 1):
            self.paginator.reset()

    def set_query(self, query: str):
        """New search text; always back to page 1."""
        self.query = query or ""
        self._recompute()
        self.paginator.reset()

    def sort_by(self, sort_key: Optional[str]):
        self.sort_key = sort_key
        self._recompute()

    def go_to(self, page: int) -> bool:
        return self.paginator.go_to(page)

    @property
    def page(self) -> int:
        return self.paginator.page

    @property
    def page_count(self) -> int:
        return self.paginator.page_count

    @property
    def rows(self) -> List[T]:
        """Items on the current page"""
        return self.paginator.slice(self.filtered)

    @property
    def is_empty(self) -> bool:
        return not self.filtered

    @property
    def message(self) -> Optional[str]:
        """Empty-state message, or None when there is something to show"""
        return self.empty_message if self.is_empty else None

    def patch(self, item_id: Any, **changes) -> bool:
        """Update one item in place (by `.id`) without refetching."""
        for item in self.items:
            if getattr(item, "id", None) == item_id:
                for name, value in changes.items():
                    setattr(item, name, value)
                self._recompute()
                return True
        return False
