"""
Base Source Adapter
===================
Abstract base class for the listing sources the storefront reads from.

Each backend source (local inventory, third-party API listings, auction
listings) names its fields differently. An adapter knows one source's
endpoint and how to map its rows into:

- SearchDocument: the unified shape behind catalog search
- AdminListing: the row shape behind the ingestion dashboards
"""

import re
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from ..api.client import ApiClient
from ..schema.listing import (
    AdminListing,
    ListingSource,
    Page,
    SearchDocument,
    VehicleImage,
    primary_image,
)

_DRIVE_SIDE = re.compile(r"\b(lhd|rhd)\b", re.IGNORECASE)


def clean_text(text: Optional[str]) -> str:
    """Strip "LHD"/"RHD" drive-side markers from a display string."""
    if not text:
        return ""
    return " ".join(_DRIVE_SIDE.sub(" ", str(text)).split())


class ListingSourceAdapter(ABC):
    """
    Abstract base class for listing sources.

    Subclasses provide the endpoint and the two row mappings; paging and
    image resolution are shared.
    """

    requires_auth = True

    def __init__(self, client: ApiClient):
        self.client = client
        self.source = self.get_source()

    @abstractmethod
    def get_source(self) -> ListingSource:
        """Which source this adapter reads"""
        pass

    @abstractmethod
    def get_list_endpoint(self) -> str:
        """Paginated list endpoint, relative to the API root"""
        pass

    @abstractmethod
    def to_search_document(self, raw: Dict[str, Any]) -> SearchDocument:
        """
        Map a raw backend row into the unified search shape.

        Args:
            raw: One element of the list endpoint's `items`

        Returns:
            SearchDocument
        """
        pass

    @abstractmethod
    def to_admin_listing(self, raw: Dict[str, Any]) -> AdminListing:
        """Map a raw backend row into an ingestion dashboard row"""
        pass

    def fetch_page(self, page: int = 1, size: int = 20) -> Page:
        """Fetch one page of raw rows."""
        data = self.client.get(
            self.get_list_endpoint(),
            params={"page": page, "size": size},
            skip_auth=not self.requires_auth,
            error_message=f"Failed to load {self.source.value} listings",
        )
        return Page.from_api(data or {}, page=page, size=size)

    def fetch_documents(self, limit: int = 1000) -> List[SearchDocument]:
        """Fetch up to `limit` rows and normalize them for search."""
        page = self.fetch_page(page=1, size=limit)
        return [self.to_search_document(raw) for raw in page.items]

    def fetch_admin_listings(self, page: int = 1, size: int = 20) -> Page:
        """Fetch a page and map it for the ingestion dashboards."""
        raw_page = self.fetch_page(page=page, size=size)
        raw_page.items = [self.to_admin_listing(raw) for raw in raw_page.items]
        return raw_page

    def image_url(self, images: Any) -> Optional[str]:
        """Absolute URL of the primary (or first) image in a raw image list"""
        parsed = [VehicleImage.from_api(i) for i in images or [] if isinstance(i, dict)]
        image = primary_image(parsed)
        return self.client.media(image.image_url) if image else None

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(source={self.source.value}, endpoint={self.get_list_endpoint()})"
