"""
Form & Request Payloads
=======================
Pydantic models for everything the toolkit sends to the backend.

Forms start empty the way the dialogs do; `missing_fields()` is checked
before a request is ever issued.
"""

import json
from typing import Any, ClassVar, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field

from .listing import ListingStatus, SavedFilter

DEFAULT_SITE_ID = "00000000-0000-0000-0000-000000000000"


class AccessoryForm(BaseModel):
    name: str = ""
    brand: str = ""
    price: float = 0
    stock: int = 0
    category_id: Optional[str] = None
    sub_category_id: Optional[str] = None
    description: str = ""
    tags: List[str] = []
    model_compatibility: List[str] = []
    created_by: Optional[str] = None

    REQUIRED: ClassVar[Tuple[str, ...]] = ("name", "brand", "category_id")

    def missing_fields(self) -> List[str]:
        return [f for f in self.REQUIRED if not (getattr(self, f) or "").strip()]

    def to_form_data(self) -> Dict[str, str]:
        """Multipart text fields; list fields travel as JSON strings."""
        data = {
            "name": self.name,
            "brand": self.brand,
            "price": str(self.price),
            "stock": str(self.stock),
            "category_id": self.category_id or "",
            "description": self.description or "",
            "tags": json.dumps(self.tags),
            "model_compatibility": json.dumps(self.model_compatibility),
            "out_of_stock": "true" if self.stock == 0 else "false",
            "created_by": self.created_by or "",
        }
        if self.sub_category_id:
            data["sub_category_id"] = self.sub_category_id
        return data


class VehicleStatusUpdate(BaseModel):
    """Single-listing status flags (/car_listing/status)"""
    id: str
    is_sold: Optional[bool] = None
    in_active: Optional[bool] = None
    is_feature: Optional[bool] = None

    def to_params(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class BulkUpdate(BaseModel):
    """Target fields for a bulk status change"""
    is_active: bool = True
    is_featured: bool = False
    status: Optional[ListingStatus] = ListingStatus.APPROVED

    def to_params(self) -> Dict[str, Any]:
        params: Dict[str, Any] = {
            "is_active": self.is_active,
            "is_featured": self.is_featured,
        }
        if self.status is not None:
            params["status"] = self.status.value
        return params


class ThirdPartyFetchParams(BaseModel):
    """Criteria for the third-party ingestion job (/api_listing/fetch)"""
    make: str = ""
    model: str = ""
    year: str = ""
    trim: str = ""
    engine: str = ""
    price: str = ""
    miles: str = ""
    limit: int = 50
    page: int = 1

    BODY_KEYS: ClassVar[Dict[str, str]] = {
        "make": "vehicle.make",
        "model": "vehicle.model",
        "year": "vehicle.year",
        "trim": "vehicle.trim",
        "engine": "vehicle.engine",
        "price": "retailListing.price",
        "miles": "retailListing.miles",
    }

    def to_body(self) -> Dict[str, str]:
        """Dot-notation body; empty criteria are left out."""
        return {
            api_key: getattr(self, field)
            for field, api_key in self.BODY_KEYS.items()
            if getattr(self, field)
        }

    def to_query(self) -> Dict[str, int]:
        return {"page": self.page, "limit": self.limit}


class AuctionFetchParams(BaseModel):
    """Criteria for the auction ingestion job (/copart_listing/fetch)"""
    limit: int = 5
    year: str = ""
    make: str = ""
    fuel_type: str = ""
    transmission: str = ""
    sale_title_type: str = ""
    est_retail_value: str = ""

    # field -> (query param name, saved filter name)
    FIELD_NAMES: ClassVar[Dict[str, Tuple[str, str]]] = {
        "year": ("Year", "Year"),
        "make": ("Make", "Make"),
        "fuel_type": ("fuel_type", "Fuel Type"),
        "transmission": ("Transmission", "Transmission"),
        "sale_title_type": ("sale_title_type", "Sale Title Type"),
        "est_retail_value": ("est_retail_value", "Est. Retail Value"),
    }

    def to_query(self) -> Dict[str, Any]:
        query: Dict[str, Any] = {}
        if self.limit:
            query["limit"] = self.limit
        for field, (param, _) in self.FIELD_NAMES.items():
            if getattr(self, field):
                query[param] = getattr(self, field)
        return query

    def to_filter_body(self, title: str) -> Dict[str, Any]:
        """Body for saving these params as a named filter."""
        body: Dict[str, Any] = {"title": title, "limit": int(self.limit)}
        for field, (_, saved_name) in self.FIELD_NAMES.items():
            if getattr(self, field):
                body[saved_name] = getattr(self, field)
        return body

    @classmethod
    def from_saved_filter(cls, saved: SavedFilter) -> "AuctionFetchParams":
        values = {
            field: saved.criteria.get(saved_name, "")
            for field, (_, saved_name) in cls.FIELD_NAMES.items()
        }
        return cls(limit=saved.limit or 5, **values)


class AssignRolePayload(BaseModel):
    user_id: str
    role_id: str
    site_id: str = Field(default=DEFAULT_SITE_ID)


class TaxonomyForm(BaseModel):
    """Add / edit dialog shared by the taxonomy screens"""
    name: str = ""
    make_id: Optional[str] = None

    def missing_fields(self, requires_make: bool = False) -> List[str]:
        missing = [] if self.name.strip() else ["name"]
        if requires_make and not (self.make_id or "").strip():
            missing.append("make_id")
        return missing

    def to_payload(self) -> Dict[str, str]:
        payload = {"name": self.name.strip()}
        if self.make_id:
            payload["makeId"] = self.make_id
        return payload


class BannerForm(BaseModel):
    name: str = ""
    position: Optional[int] = None
    details: Dict[str, Any] = {}

    def missing_fields(self) -> List[str]:
        return [] if self.name.strip() else ["name"]

    def to_body(self) -> Dict[str, Any]:
        """JSON body for an update without a new image"""
        return {"name": self.name, "position": self.position, "details": self.details}

    def to_form_data(self) -> Dict[str, str]:
        """Multipart text fields for create"""
        data = {"name": self.name, "details": json.dumps(self.details)}
        if self.position is not None:
            data["position"] = str(self.position)
        return data
