"""
Seller Listing Service
======================
A seller's own listings (/seller_listing/*).
"""

from typing import Any, Dict, List

from ..api.client import ApiClient
from ..schema.listing import Vehicle
from ..utils.logger import get_logger

logger = get_logger(__name__)

# fields the seller edit dialog may send
EDITABLE_FIELDS = (
    "make_id", "model", "year", "price", "mileage", "color", "location",
    "description", "seats", "condition", "fuel_type_id", "transmission_id",
    "body_type_id", "badge_id", "engine_type", "min_price",
)


class SellerListingService:
    def __init__(self, client: ApiClient):
        self.client = client

    def my_listings(self, size: int = 20) -> List[Vehicle]:
        data = self.client.get(
            "/seller_listing/my-listing",
            params={"page": 1, "size": size},
            error_message="Failed to load your listings",
        )
        return [Vehicle.from_api(item) for item in (data or {}).get("items") or []]

    def update(self, listing_id: str, changes: Dict[str, Any]) -> Any:
        """Send the edited fields; blanks and unknown fields are left out."""
        body = {k: v for k, v in changes.items() if k in EDITABLE_FIELDS and v not in (None, "")}
        logger.info("Updating seller listing %s: %s", listing_id, sorted(body))
        return self.client.put(
            "/seller_listing/update",
            params={"id": listing_id},
            json=body,
            error_message="Failed to update vehicle",
        )
