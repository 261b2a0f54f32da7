"""
Listing Sources
===============
Concrete adapters for the three sources behind catalog search.

- InventoryAdapter: dealership inventory (/car_listing/listing)
- ThirdPartyAdapter: third-party API listings (/api_listing/public)
- AuctionAdapter: auction listings (/copart_listing/admin)
"""

from typing import Any, Dict

from .base_adapter import ListingSourceAdapter, clean_text
from ..schema.listing import (
    AdminListing,
    ListingSource,
    ListingStatus,
    Option,
    SearchDocument,
    Vehicle,
    parse_datetime,
    _float_or_none,
    _int_or_none,
    _str_or_none,
)


class InventoryAdapter(ListingSourceAdapter):
    """Dealership's own inventory"""

    def get_source(self) -> ListingSource:
        return ListingSource.INVENTORY

    def get_list_endpoint(self) -> str:
        return "/car_listing/listing"

    def to_search_document(self, raw: Dict[str, Any]) -> SearchDocument:
        vehicle = Vehicle.from_api(raw)
        image = vehicle.get_primary_image()
        return SearchDocument(
            id=vehicle.id,
            title=clean_text(vehicle.title),
            make=vehicle.make or Option(name="Unknown"),
            model=clean_text(vehicle.model),
            year=vehicle.year,
            body_type=vehicle.body_type,
            fuel_type=vehicle.fuel_type,
            transmission=vehicle.transmission,
            color=vehicle.color,
            slug=vehicle.slug or vehicle.id,
            image=self.client.media(image.image_url) if image else None,
            location=vehicle.location,
            price=vehicle.price,
            mileage=vehicle.mileage,
            seats=vehicle.seats,
            listed_at=vehicle.created_at,
            badges=[vehicle.badge.name] if vehicle.badge and vehicle.badge.name else [],
            source=self.source,
        )

    def to_admin_listing(self, raw: Dict[str, Any]) -> AdminListing:
        vehicle = Vehicle.from_api(raw)
        image = vehicle.get_primary_image()
        return AdminListing(
            id=vehicle.id,
            title=vehicle.title,
            make=(vehicle.make.name if vehicle.make else None) or "Unknown",
            model=vehicle.model or "Unknown",
            year=vehicle.year,
            price=vehicle.price or 0.0,
            miles=vehicle.mileage,
            body_style=(vehicle.body_type.name if vehicle.body_type else None) or "Unknown",
            image=self.client.media(image.image_url) if image else "",
            slug=vehicle.slug or vehicle.id,
            is_active=vehicle.is_active,
            is_featured=vehicle.is_featured,
            status=ListingStatus.APPROVED.value,
            source=self.source,
        )


class ThirdPartyAdapter(ListingSourceAdapter):
    """
    Listings pulled in from the third-party vehicle API.

    Make, body type, fuel type and transmission live under `meta_data`.
    """

    requires_auth = False

    def get_source(self) -> ListingSource:
        return ListingSource.THIRD_PARTY

    def get_list_endpoint(self) -> str:
        return "/api_listing/public"

    def to_search_document(self, raw: Dict[str, Any]) -> SearchDocument:
        meta = raw.get("meta_data") or {}
        make = meta.get("make") or ""
        year = _int_or_none(raw.get("year"))
        model = raw.get("model") or ""

        return SearchDocument(
            id=str(raw.get("id")),
            title=clean_text(f"{year or ''} {make} {model}"),
            make=Option(id="tp-make", name=make or "Unknown", slug=(make or "unknown").lower()),
            model=clean_text(model or "Unknown"),
            year=year,
            body_type=Option(
                id="tp-body",
                name=meta.get("bodyType") or "Unknown",
                slug=(meta.get("bodyType") or "unknown").lower(),
            ),
            fuel_type=Option(id="tp-fuel", name=meta.get("fuelType") or "N/A"),
            transmission=Option(id="tp-trans", name=clean_text(meta.get("transmission") or "N/A")),
            color=raw.get("exteriorColor"),
            slug=str(raw.get("id")),
            image=self.image_url(raw.get("images")),
            location=", ".join(p for p in [raw.get("city"), raw.get("state")] if p) or None,
            price=_float_or_none(raw.get("price")),
            mileage=_str_or_none(raw.get("miles")),
            seats=_int_or_none(raw.get("seats")),
            listed_at=parse_datetime(raw.get("createdAt")),
            source=self.source,
        )

    def to_admin_listing(self, raw: Dict[str, Any]) -> AdminListing:
        meta = raw.get("meta_data") or {}
        return AdminListing(
            id=str(raw.get("id")),
            title=raw.get("title") or "",
            make=meta.get("make") or "Unknown",
            model=raw.get("model") or "Unknown",
            year=_int_or_none(raw.get("year")),
            price=_float_or_none(raw.get("price")) or 0.0,
            miles=_str_or_none(raw.get("miles")),
            body_style=meta.get("bodyType") or "Unknown",
            image=self.image_url(raw.get("images")) or "",
            slug=str(raw.get("id")),
            dealer=raw.get("dealer") or "",
            is_active=raw.get("is_active", True) is not False,
            source=self.source,
        )


class AuctionAdapter(ListingSourceAdapter):
    """
    Auction (Copart) listings.

    Price is the estimated retail value; the model is the detailed model
    name when present, otherwise the model group.
    """

    def get_source(self) -> ListingSource:
        return ListingSource.AUCTION

    def get_list_endpoint(self) -> str:
        return "/copart_listing/admin"

    def _model(self, raw: Dict[str, Any]) -> str:
        return raw.get("model_detail") or raw.get("model_group") or ""

    def to_search_document(self, raw: Dict[str, Any]) -> SearchDocument:
        make = raw.get("make") or ""
        model = self._model(raw)
        year = _int_or_none(raw.get("year"))
        fuel = raw.get("fuel_type") or raw.get("fuel")
        transmission = raw.get("transmission")
        body = raw.get("body_style")

        return SearchDocument(
            id=str(raw.get("id")),
            title=clean_text(f"{year or ''} {make} {model}"),
            make=Option(name=make or "Unknown", slug=(make or "unknown").lower()),
            model=clean_text(model or "Unknown"),
            year=year,
            body_type=Option(name=body) if body else None,
            fuel_type=Option(name=fuel) if fuel else None,
            transmission=Option(name=clean_text(transmission)) if transmission else None,
            color=raw.get("color"),
            slug=str(raw.get("id")),
            image=self.image_url(raw.get("images")),
            location=raw.get("yard_name") or raw.get("location"),
            price=_float_or_none(raw.get("est_retail_value")),
            mileage=_str_or_none(raw.get("odometer")),
            listed_at=parse_datetime(raw.get("created_at")),
            source=self.source,
        )

    def to_admin_listing(self, raw: Dict[str, Any]) -> AdminListing:
        make = raw.get("make") or "Unknown"
        model = self._model(raw) or "Unknown"
        return AdminListing(
            id=str(raw.get("id")),
            title=f"{raw.get('year') or ''} {raw.get('make') or ''} {self._model(raw)}".strip(),
            make=make,
            model=model,
            year=_int_or_none(raw.get("year")),
            price=_float_or_none(raw.get("est_retail_value")) or 0.0,
            miles=_str_or_none(raw.get("odometer")),
            body_style=raw.get("body_style") or "Unknown",
            image=self.image_url(raw.get("images")) or "",
            slug=str(raw.get("id")),
            dealer=f"Copart - {raw.get('yard_name') or raw.get('yard_number') or ''}".rstrip(" -"),
            is_active=raw.get("is_active") is not False,
            is_featured=bool(raw.get("is_featured")),
            status=raw.get("status") or ListingStatus.PENDING.value,
            source=self.source,
        )
