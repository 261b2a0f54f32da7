"""
Catalog Search
==============
Builds one fuzzy index over all three listing sources and answers the
suggestion box.

Each source is fetched on its own; a source that fails is logged and left
out, so search still works over whatever did load. If building the index
itself fails, suggestions stay empty rather than raising.
"""

from typing import List, Optional
from urllib.parse import quote

from .fuzzy import DEFAULT_KEYS, FuzzyIndex, SearchKey
from ..adapters.base_adapter import ListingSourceAdapter
from ..adapters.sources import AuctionAdapter, InventoryAdapter, ThirdPartyAdapter
from ..api.client import ApiClient
from ..api.errors import ArudealError
from ..schema.listing import SearchDocument
from ..utils.logger import get_logger

logger = get_logger(__name__)

SUGGESTION_LIMIT = 10
SOURCE_LIMIT = 1000


def search_route(query: str) -> str:
    """Route of the listing search page for a submitted query"""
    return f"/listings?search={quote(query, safe='')}"


class CatalogSearch:
    """
    Unified search over inventory, third-party and auction listings.

    Args:
        client: Backend client shared by the three adapters
        source_limit: Rows fetched from each source
        keys / threshold / distance: Passed to FuzzyIndex
    """

    def __init__(
        self,
        client: ApiClient,
        source_limit: int = SOURCE_LIMIT,
        keys: Optional[List[SearchKey]] = None,
        threshold: float = 0.4,
        distance: int = 100,
        adapters: Optional[List[ListingSourceAdapter]] = None,
    ):
        self.client = client
        self.source_limit = source_limit
        self.keys = keys or DEFAULT_KEYS
        self.threshold = threshold
        self.distance = distance
        self.adapters = adapters if adapters is not None else [
            InventoryAdapter(client),
            ThirdPartyAdapter(client),
            AuctionAdapter(client),
        ]

        self.documents: List[SearchDocument] = []
        self.failed_sources: List[str] = []
        self.index: Optional[FuzzyIndex] = None

    def load(self) -> "CatalogSearch":
        """Fetch every source, then build the index."""
        self.documents = []
        self.failed_sources = []

        for adapter in self.adapters:
            try:
                docs = adapter.fetch_documents(limit=self.source_limit)
            except ArudealError as e:
                logger.error("Failed to load %s listings: %s", adapter.source.value, e)
                self.failed_sources.append(adapter.source.value)
                continue
            logger.info("Loaded %d %s listings", len(docs), adapter.source.value)
            self.documents.extend(docs)

        self.build_index()
        return self

    def build_index(self):
        try:
            self.index = FuzzyIndex(
                self.documents,
                keys=self.keys,
                threshold=self.threshold,
                distance=self.distance,
            )
        except Exception as e:
            # no index means no suggestions; the search box keeps working
            logger.error("Failed to build search index: %s", e)
            self.index = None

    def suggest(self, query: str, limit: int = SUGGESTION_LIMIT) -> List[SearchDocument]:
        """Best matches for the text typed so far"""
        if self.index is None or not (query or "").strip():
            return []
        return [r.item for r in self.index.search(query, limit=limit)]

    def submit(self, query: str) -> Optional[str]:
        """Route to navigate to when the query is submitted (None if blank)"""
        if not (query or "").strip():
            return None
        return search_route(query.strip())
