"""
Ingestion Services
==================
Third-party API listings (/api_listing/*) and auction listings
(/copart_listing/*).

Both sources feed the same admin dashboards: list what was imported,
trigger a new import, and bulk-moderate the results.
"""

import os
from typing import Any, BinaryIO, List, Sequence, Union

from ..adapters.sources import AuctionAdapter, ThirdPartyAdapter
from ..api.client import ApiClient
from ..api.errors import FormValidationError
from ..import_export.csv_seed import validate_seed_file
from ..schema.forms import AuctionFetchParams, BulkUpdate, ThirdPartyFetchParams
from ..schema.listing import Page, SavedFilter
from ..utils.logger import get_logger

logger = get_logger(__name__)


class ThirdPartyService:
    def __init__(self, client: ApiClient):
        self.client = client
        self.adapter = ThirdPartyAdapter(client)

    def list(self, page: int = 1, size: int = 20) -> Page:
        """Imported listings as AdminListing rows"""
        return self.adapter.fetch_admin_listings(page=page, size=size)

    def fetch(self, params: ThirdPartyFetchParams) -> Any:
        """Start an import job on the backend."""
        logger.info("Third-party fetch: %s", params.to_body() or "no criteria")
        return self.client.post(
            "/api_listing/fetch",
            params=params.to_query(),
            json=params.to_body(),
            error_message="Fetch failed",
        )


class AuctionService:
    """Auction listings, saved fetch filters and CSV-seeded imports"""

    def __init__(self, client: ApiClient):
        self.client = client
        self.adapter = AuctionAdapter(client)

    def list(self, page: int = 1, size: int = 20) -> Page:
        return self.adapter.fetch_admin_listings(page=page, size=size)

    # Saved filters

    def list_filters(self) -> List[SavedFilter]:
        data = self.client.get("/copart_listing/filters", error_message="Failed to fetch saved filters")
        if isinstance(data, dict):
            data = data.get("items") or []
        return [SavedFilter.from_api(f) for f in data or []]

    def save_filter(self, title: str, params: AuctionFetchParams, filter_id: str = None) -> Any:
        """Create a saved filter, or overwrite `filter_id` when given."""
        if not title or not title.strip():
            raise FormValidationError(["title"])

        body = params.to_filter_body(title.strip())
        if filter_id:
            return self.client.put(
                f"/copart_listing/filters/{filter_id}",
                json=body,
                error_message="Failed to save filter",
            )
        return self.client.post("/copart_listing/filters", json=body, error_message="Failed to save filter")

    def delete_filter(self, filter_id: str) -> Any:
        return self.client.delete(
            f"/copart_listing/filters/{filter_id}",
            error_message="Failed to delete filter",
        )

    # Import

    def fetch(self, params: AuctionFetchParams, seed: Union[str, BinaryIO, None]) -> Any:
        """
        Start a background import seeded by a CSV file.

        Args:
            params: Fetch criteria sent as query params
            seed: Path to the CSV seed file, or an open binary file

        Raises:
            FormValidationError: no seed file given
            SeedFileError: the seed path is not a readable CSV
        """
        if seed is None or seed == "":
            raise FormValidationError(["file"])

        if isinstance(seed, str):
            validate_seed_file(seed)
            with open(seed, "rb") as fh:
                return self._upload(params, (os.path.basename(seed), fh, "text/csv"))

        name = os.path.basename(getattr(seed, "name", "seed.csv"))
        return self._upload(params, (name, seed, "text/csv"))

    def _upload(self, params: AuctionFetchParams, file_tuple) -> Any:
        logger.info("Auction fetch with %s", params.to_query())
        return self.client.post(
            "/copart_listing/fetch",
            params=params.to_query(),
            files={"file": file_tuple},
            error_message="Fetch failed",
        )

    # Moderation

    def bulk_update(self, ids: Sequence[str], update: BulkUpdate) -> Any:
        return self.client.put(
            "/copart_listing/admin",
            params=update.to_params(),
            json=list(ids),
            error_message="Failed to update listings",
        )

    def bulk_delete(self, ids: Sequence[str]) -> Any:
        return self.client.delete(
            "/copart_listing/admin",
            json=list(ids),
            error_message="Failed to delete listings",
        )

    def set_active(self, listing_id: str, is_active: bool) -> Any:
        """Single-row toggle; status is left untouched."""
        return self.bulk_update([listing_id], BulkUpdate(is_active=is_active, is_featured=False, status=None))
