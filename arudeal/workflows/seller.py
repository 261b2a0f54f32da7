"""
Seller Listings
===============
The seller's own listings and the edit dialog.
"""

from typing import Any, Dict, List, Optional

from .base import ActionResult, Screen
from ..notifications.notification_manager import NotificationManager
from ..schema.listing import Vehicle
from ..services.seller import SellerListingService


class SellerListingsScreen(Screen):
    def __init__(self, service: SellerListingService, notifier: Optional[NotificationManager] = None, size: int = 20):
        super().__init__(notifier)
        self.service = service
        self.size = size
        self.listings: List[Vehicle] = []

    def load(self) -> ActionResult:
        result = self.run("load_my_listings", lambda: self.service.my_listings(size=self.size))
        if result.success:
            self.listings = result.data
        return result

    def update(self, listing_id: str, changes: Dict[str, Any]) -> ActionResult:
        result = self.run(
            "update_my_listing",
            lambda: self.service.update(listing_id, changes),
            success_message=lambda _: "Vehicle updated successfully",
        )
        if result.success:
            self.load()
        return result
