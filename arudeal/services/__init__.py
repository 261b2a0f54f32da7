"""Backend resource services"""

from .vehicles import VehicleService, LookupService
from .accessories import AccessoryService
from .ingestion import ThirdPartyService, AuctionService
from .users import UserRoleService, RoleNotFoundError
from .dashboard import DashboardService, SellerStats, seller_stats
from .seller import SellerListingService
from .taxonomy import TAXONOMIES, TaxonomyKind, TaxonomyService, BannerService

__all__ = [
    "VehicleService",
    "LookupService",
    "AccessoryService",
    "ThirdPartyService",
    "AuctionService",
    "UserRoleService",
    "RoleNotFoundError",
    "DashboardService",
    "SellerStats",
    "seller_stats",
    "SellerListingService",
    "TAXONOMIES",
    "TaxonomyKind",
    "TaxonomyService",
    "BannerService",
]
