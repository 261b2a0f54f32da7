"""Listing source adapters"""

from .base_adapter import ListingSourceAdapter, clean_text
from .sources import InventoryAdapter, ThirdPartyAdapter, AuctionAdapter

__all__ = [
    "ListingSourceAdapter",
    "clean_text",
    "InventoryAdapter",
    "ThirdPartyAdapter",
    "AuctionAdapter",
]
