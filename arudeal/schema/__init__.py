"""View models and request payloads"""

from .listing import (
    ListingSource,
    ListingStatus,
    Option,
    VehicleImage,
    Feature,
    Vehicle,
    Accessory,
    AccessoryCategory,
    AdminListing,
    SavedFilter,
    Role,
    User,
    TaxonomyItem,
    Banner,
    Page,
    SearchDocument,
    primary_image,
    parse_datetime,
)
from .forms import (
    AccessoryForm,
    VehicleStatusUpdate,
    BulkUpdate,
    ThirdPartyFetchParams,
    AuctionFetchParams,
    AssignRolePayload,
    TaxonomyForm,
    BannerForm,
    DEFAULT_SITE_ID,
)

__all__ = [
    "ListingSource",
    "ListingStatus",
    "Option",
    "VehicleImage",
    "Feature",
    "Vehicle",
    "Accessory",
    "AccessoryCategory",
    "AdminListing",
    "SavedFilter",
    "Role",
    "User",
    "TaxonomyItem",
    "Banner",
    "Page",
    "SearchDocument",
    "primary_image",
    "parse_datetime",
    "AccessoryForm",
    "VehicleStatusUpdate",
    "BulkUpdate",
    "ThirdPartyFetchParams",
    "AuctionFetchParams",
    "AssignRolePayload",
    "TaxonomyForm",
    "BannerForm",
    "DEFAULT_SITE_ID",
]
