"""Fuzzy catalog search"""

from .fuzzy import FuzzyIndex, SearchKey, SearchResult, DEFAULT_KEYS, match_score, get_value_from_path
from .catalog import CatalogSearch, search_route

__all__ = [
    "FuzzyIndex",
    "SearchKey",
    "SearchResult",
    "DEFAULT_KEYS",
    "match_score",
    "get_value_from_path",
    "CatalogSearch",
    "search_route",
]
