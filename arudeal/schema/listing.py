"""
Listing View Models
===================
Plain local mirrors of backend rows. Nothing here is authoritative: every
object matches the last successful fetch and is thrown away on refetch.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Generic, List, Optional, TypeVar


class ListingSource(Enum):
    """Where a search document came from"""
    INVENTORY = "inventory"        # /car_listing
    THIRD_PARTY = "third_party"    # /api_listing
    AUCTION = "auction"            # /copart_listing


class ListingStatus(Enum):
    """Review status used by the ingestion screens"""
    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


@dataclass
class Option:
    """Lookup value (make, body type, fuel type, transmission, badge)"""
    id: Optional[str] = None
    name: Optional[str] = None
    slug: Optional[str] = None

    @classmethod
    def from_api(cls, data: Any) -> Optional["Option"]:
        if data is None:
            return None
        if isinstance(data, str):
            return cls(id=data, name=data)
        return cls(
            id=_str_or_none(data.get("id")),
            name=data.get("name"),
            slug=data.get("slug"),
        )


@dataclass
class VehicleImage:
    """Image attached to a listing"""
    image_url: str
    id: Optional[str] = None
    is_primary: bool = False
    position: int = 0
    is_display: bool = True

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "VehicleImage":
        return cls(
            id=_str_or_none(data.get("id")),
            image_url=data.get("image_url") or "",
            is_primary=bool(data.get("is_primary")),
            position=int(data.get("position") or 0),
            is_display=data.get("is_display", True) is not False,
        )


def primary_image(images: List[VehicleImage]) -> Optional[VehicleImage]:
    """The image flagged primary, otherwise the first one"""
    for image in images:
        if image.is_primary:
            return image
    return images[0] if images else None


@dataclass
class Feature:
    """Free-form vehicle feature"""
    name: str
    reason: Optional[str] = None


@dataclass
class Vehicle:
    """
    Local inventory listing (/car_listing).

    `vehical_id` keeps the backend's spelling so payloads round-trip.
    """

    id: str
    title: str = ""
    make: Optional[Option] = None
    model: Optional[str] = None
    year: Optional[int] = None
    body_type: Optional[Option] = None
    price: Optional[float] = None
    vehical_id: Optional[str] = None
    slug: Optional[str] = None

    is_active: bool = True
    is_sold: bool = False
    is_featured: bool = False

    images: List[VehicleImage] = field(default_factory=list)
    mileage: Optional[str] = None
    color: Optional[str] = None
    seats: Optional[int] = None
    engine_type: Optional[str] = None
    transmission: Optional[Option] = None
    fuel_type: Optional[Option] = None
    badge: Optional[Option] = None
    features: List[Feature] = field(default_factory=list)
    location: Optional[str] = None
    condition: Optional[str] = None
    dealer_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Vehicle":
        return cls(
            id=str(data.get("id") or data.get("_id") or ""),
            title=data.get("title") or "",
            make=Option.from_api(data.get("make")),
            model=data.get("model"),
            year=_int_or_none(data.get("year")),
            body_type=Option.from_api(data.get("body_type")),
            price=_float_or_none(data.get("price")),
            vehical_id=data.get("vehical_id"),
            slug=data.get("slug"),
            is_active=data.get("is_active", True) is not False,
            is_sold=bool(data.get("is_sold")),
            is_featured=bool(data.get("is_featured") or data.get("is_feature")),
            images=[VehicleImage.from_api(i) for i in data.get("images") or []],
            mileage=_str_or_none(data.get("mileage")),
            color=data.get("color"),
            seats=_int_or_none(data.get("seats")),
            engine_type=data.get("engine_type"),
            transmission=Option.from_api(data.get("transmission")),
            fuel_type=Option.from_api(data.get("fuel_type")),
            badge=Option.from_api(data.get("badge")),
            features=[
                Feature(name=f.get("name", ""), reason=f.get("reason"))
                for f in data.get("features") or []
                if isinstance(f, dict)
            ],
            location=data.get("location"),
            condition=data.get("condition"),
            dealer_id=_str_or_none(data.get("dealer_id") or data.get("created_by")),
            created_at=parse_datetime(data.get("created_at") or data.get("createdAt")),
            updated_at=parse_datetime(data.get("updated_at")),
        )

    def get_primary_image(self) -> Optional[VehicleImage]:
        return primary_image(self.images)


@dataclass
class AccessoryCategory:
    """Accessory category or sub-category"""
    id: str
    name: str
    category_id: Optional[str] = None  # set on sub-categories

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "AccessoryCategory":
        return cls(
            id=str(data.get("id")),
            name=data.get("name") or "",
            category_id=_str_or_none(data.get("category_id")),
        )


@dataclass
class Accessory:
    """Car accessory (/car_accessory)"""

    id: str
    name: str
    brand: Optional[str] = None
    price: float = 0.0
    stock: int = 0
    category_id: Optional[str] = None
    category: Optional[str] = None
    sub_category_id: Optional[str] = None
    description: str = ""
    tags: List[str] = field(default_factory=list)
    model_compatibility: List[str] = field(default_factory=list)
    images: List[VehicleImage] = field(default_factory=list)
    created_at: Optional[datetime] = None

    @property
    def out_of_stock(self) -> bool:
        return self.stock == 0

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Accessory":
        category = data.get("category")
        category_id = data.get("category_id")
        category_name = category
        if isinstance(category, dict):
            category_id = category_id or category.get("id")
            category_name = category.get("name")

        return cls(
            id=str(data.get("id")),
            name=data.get("name") or "",
            brand=data.get("brand"),
            price=_float_or_none(data.get("price")) or 0.0,
            stock=_int_or_none(data.get("stock")) or 0,
            category_id=_str_or_none(category_id),
            category=category_name,
            sub_category_id=_str_or_none(data.get("sub_category_id")),
            description=data.get("description") or "",
            tags=list(data.get("tags") or []),
            model_compatibility=list(data.get("model_compatibility") or []),
            images=[VehicleImage.from_api(i) for i in data.get("images") or [] if isinstance(i, dict)],
            created_at=parse_datetime(data.get("created_at")),
        )


@dataclass
class AdminListing:
    """
    Row on the third-party / auction ingestion screens.

    Both sources are mapped to this one shape so the same filter, stats and
    bulk workflows apply.
    """

    id: str
    title: str
    make: str = "Unknown"
    model: str = "Unknown"
    year: Optional[int] = None
    price: float = 0.0
    miles: Optional[str] = None
    body_style: str = "Unknown"
    image: str = ""
    slug: str = ""
    dealer: str = ""
    is_active: bool = True
    is_featured: bool = False
    status: str = ListingStatus.PENDING.value
    source: ListingSource = ListingSource.THIRD_PARTY


@dataclass
class SavedFilter:
    """
    Named bag of auction fetch parameters.

    `criteria` keeps the backend's field names ("Year", "Fuel Type", ...) so
    the filter is sent back verbatim.
    """

    id: str
    title: str
    limit: int = 5
    criteria: Dict[str, str] = field(default_factory=dict)

    CRITERIA_FIELDS = (
        "Year",
        "Make",
        "Fuel Type",
        "Transmission",
        "Sale Title Type",
        "Est. Retail Value",
    )

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "SavedFilter":
        return cls(
            id=str(data.get("id")),
            title=data.get("title") or "",
            limit=_int_or_none(data.get("limit")) or 5,
            criteria={k: str(data[k]) for k in cls.CRITERIA_FIELDS if data.get(k)},
        )

    def summary(self) -> str:
        """Human summary, e.g. "2020 • Toyota • Limit: 5" """
        parts = [self.criteria[k] for k in self.CRITERIA_FIELDS if self.criteria.get(k)]
        if self.limit:
            parts.append(f"Limit: {self.limit}")
        return " • ".join(parts) or "No specific criteria"


@dataclass
class Role:
    id: str
    name: str


@dataclass
class User:
    id: str
    email: str
    first_name: str = ""
    last_name: str = ""
    mid_name: Optional[str] = None
    role_name: Optional[str] = None

    @property
    def full_name(self) -> str:
        return " ".join(p for p in [self.first_name, self.mid_name, self.last_name] if p)

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "User":
        return cls(
            id=str(data.get("id")),
            email=data.get("email") or "",
            first_name=data.get("first_name") or "",
            last_name=data.get("last_name") or "",
            mid_name=data.get("mid_name"),
            role_name=data.get("role_name"),
        )


@dataclass
class TaxonomyItem:
    """Make, model, engine, fuel type, transmission or body type row"""
    id: str
    name: str
    image_url: Optional[str] = None
    make_id: Optional[str] = None     # models only
    make_name: Optional[str] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "TaxonomyItem":
        # the newer taxonomy endpoints are Mongo-backed and send `_id`
        return cls(
            id=str(data.get("_id") or data.get("id")),
            name=data.get("name") or "",
            image_url=data.get("image_url") or data.get("image") or data.get("logo"),
            make_id=_str_or_none(data.get("makeId")),
            make_name=data.get("makeName"),
        )


@dataclass
class Banner:
    """Home-page banner"""
    id: str
    name: str
    image_url: Optional[str] = None
    is_display: bool = True
    details: Dict[str, Any] = field(default_factory=dict)
    position: Optional[int] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Banner":
        details = data.get("details")
        return cls(
            id=str(data.get("id")),
            name=data.get("name") or "",
            image_url=data.get("image_url"),
            is_display=data.get("is_display", True) is not False,
            details=details if isinstance(details, dict) else {},
            position=_int_or_none(data.get("position")),
        )


T = TypeVar("T")


@dataclass
class Page(Generic[T]):
    """Paginated list response"""
    items: List[T]
    total_items: int = 0
    total_pages: int = 0
    page: int = 1
    size: int = 0

    @classmethod
    def from_api(cls, data: Dict[str, Any], parse=None, page: int = 1, size: int = 0) -> "Page":
        raw = (data or {}).get("items") or []
        items = [parse(item) for item in raw] if parse else list(raw)
        return cls(
            items=items,
            total_items=int((data or {}).get("total_items") or len(items)),
            total_pages=int((data or {}).get("total_pages") or 0),
            page=int((data or {}).get("page") or page),
            size=int((data or {}).get("size") or size),
        )


@dataclass
class SearchDocument:
    """
    The common shape every listing source is normalized into.

    make / body_type / fuel_type / transmission are Options so the search
    keys read "make.name", "body_type.name" etc.
    """

    id: str
    title: str
    make: Option
    model: str = ""
    year: Optional[int] = None
    body_type: Optional[Option] = None
    fuel_type: Optional[Option] = None
    transmission: Optional[Option] = None
    color: Optional[str] = None
    slug: str = ""
    image: Optional[str] = None
    location: Optional[str] = None
    price: Optional[float] = None
    mileage: Optional[str] = None
    seats: Optional[int] = None
    listed_at: Optional[datetime] = None
    badges: List[str] = field(default_factory=list)
    source: ListingSource = ListingSource.INVENTORY

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization"""
        return {
            "id": self.id,
            "title": self.title,
            "make": self.make.name if self.make else None,
            "model": self.model,
            "year": self.year,
            "body_type": self.body_type.name if self.body_type else None,
            "fuel_type": self.fuel_type.name if self.fuel_type else None,
            "transmission": self.transmission.name if self.transmission else None,
            "color": self.color,
            "slug": self.slug,
            "image": self.image,
            "location": self.location,
            "price": self.price,
            "mileage": self.mileage,
            "seats": self.seats,
            "listed_at": self.listed_at.isoformat() if self.listed_at else None,
            "source": self.source.value,
        }


def parse_datetime(value: Any) -> Optional[datetime]:
    """Parse ISO timestamps from the backend; anything unparseable is None"""
    if not value:
        return None
    if isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return None


def _str_or_none(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value)


def _int_or_none(value: Any) -> Optional[int]:
    try:
        return int(value) if value not in (None, "") else None
    except (TypeError, ValueError):
        return None


def _float_or_none(value: Any) -> Optional[float]:
    try:
        return float(value) if value not in (None, "") else None
    except (TypeError, ValueError):
        return None
