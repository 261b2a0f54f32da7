"""Derived list views: filter, sort, paginate, select"""

from .pipeline import (
    ListView,
    Paginator,
    page_window,
    sort_items,
    normalize_sort_key,
    SORT_ALIASES,
    EMPTY_MESSAGE,
)
from .selection import Selection
from .filters import (
    vehicle_matches,
    admin_listing_matches,
    accessory_matches,
    filter_accessories,
    parse_seat_query,
    catalog_search,
    parse_price_range,
    CatalogFilters,
    facet_options,
    sort_by_make_priority,
    MAKE_PRIORITY,
    price_badge,
    parse_mileage,
    listing_stats,
    ListingStats,
)

__all__ = [
    "ListView",
    "Paginator",
    "page_window",
    "sort_items",
    "normalize_sort_key",
    "SORT_ALIASES",
    "EMPTY_MESSAGE",
    "Selection",
    "vehicle_matches",
    "admin_listing_matches",
    "accessory_matches",
    "filter_accessories",
    "parse_seat_query",
    "catalog_search",
    "parse_price_range",
    "CatalogFilters",
    "facet_options",
    "sort_by_make_priority",
    "MAKE_PRIORITY",
    "price_badge",
    "parse_mileage",
    "listing_stats",
    "ListingStats",
]
