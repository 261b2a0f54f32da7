"""Admin screens: backend actions with toast feedback"""

from .base import ActionResult, Screen
from .vehicles import VehicleManagerScreen
from .accessories import AccessoryManagerScreen
from .ingestion import IngestionScreen, ThirdPartyScreen, AuctionScreen
from .users import UserRoleScreen
from .taxonomy import TaxonomyScreen, BannerScreen
from .seller import SellerListingsScreen

__all__ = [
    "ActionResult",
    "Screen",
    "VehicleManagerScreen",
    "AccessoryManagerScreen",
    "IngestionScreen",
    "ThirdPartyScreen",
    "AuctionScreen",
    "UserRoleScreen",
    "TaxonomyScreen",
    "BannerScreen",
    "SellerListingsScreen",
]
