"""
View Filters
============
Row predicates and small derived values used by the list screens.

- *_matches(): case-insensitive substring predicates for ListView
- catalog search: keyword + seat-count matching for the public catalog
- CatalogFilters: facet dropdowns (make, model, type, colour, ...)
- make priority, price badges, mileage parsing, listing stats
"""

import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from ..schema.listing import Accessory, AdminListing, SearchDocument, Vehicle


def _contains(fields, term: str) -> bool:
    return any(f and term in str(f).lower() for f in fields)


def _price_text(price: Optional[float]) -> Optional[str]:
    if price is None:
        return None
    return str(int(price)) if float(price).is_integer() else str(price)


def vehicle_matches(vehicle: Vehicle, term: str) -> bool:
    """Admin inventory search across every descriptive field"""
    fields = [
        vehicle.title,
        vehicle.make.name if vehicle.make else None,
        vehicle.model,
        vehicle.year,
        vehicle.body_type.name if vehicle.body_type else None,
        _price_text(vehicle.price),
        vehicle.vehical_id,
        vehicle.mileage,
        vehicle.color,
        vehicle.seats,
        vehicle.engine_type,
        vehicle.transmission.name if vehicle.transmission else None,
        vehicle.fuel_type.name if vehicle.fuel_type else None,
        vehicle.badge.name if vehicle.badge else None,
        vehicle.location,
        vehicle.condition,
    ]
    fields += [f.name for f in vehicle.features]
    fields += [f.reason for f in vehicle.features if f.reason]
    return _contains(fields, term.lower())


def admin_listing_matches(listing: AdminListing, term: str) -> bool:
    """Ingestion screens search title, make and model"""
    return _contains([listing.title, listing.make, listing.model], term.lower())


def accessory_matches(accessory: Accessory, term: str) -> bool:
    return _contains([accessory.name, accessory.description], term.lower())


def filter_accessories(
    accessories: Sequence[Accessory],
    term: str = "",
    category_id: Optional[str] = None,
) -> List[Accessory]:
    """Search text plus optional exact category"""
    term = (term or "").strip().lower()
    return [
        a for a in accessories
        if (not term or accessory_matches(a, term))
        and (not category_id or a.category_id == category_id)
    ]


# Public catalog search

NUMBER_WORDS = {
    "one": 1,
    "two": 2,
    "three": 3,
    "four": 4,
    "five": 5,
    "six": 6,
    "seven": 7,
    "eight": 8,
    "nine": 9,
    "ten": 10,
}

_SEAT_DIGITS = re.compile(r"\b(\d{1,2})\s*(seats?|seater)?\b")
_SEAT_WORDS = re.compile(r"\b(" + "|".join(NUMBER_WORDS) + r")\s*(seats?|seater)?\b", re.IGNORECASE)


def parse_seat_query(query: str) -> Optional[int]:
    """
    Seat count mentioned in a query, if any.

    "7 seater", "seven seats" and a bare "7" all give 7.
    """
    query = (query or "").lower()
    match = _SEAT_DIGITS.search(query)
    if match and int(match.group(1)):
        return int(match.group(1))
    match = _SEAT_WORDS.search(query)
    if match:
        return NUMBER_WORDS[match.group(1).lower()]
    return None


def _haystack(doc: SearchDocument) -> str:
    parts = [
        doc.title,
        doc.fuel_type.name if doc.fuel_type else None,
        doc.make.name if doc.make else None,
        doc.model,
        doc.body_type.name if doc.body_type else None,
        doc.transmission.name if doc.transmission else None,
        doc.color,
        doc.location,
        " ".join(doc.badges) if doc.badges else None,
        str(doc.year) if doc.year else None,
    ]
    return " ".join(p for p in parts if p).lower()


def catalog_search(docs: Sequence[SearchDocument], query: str) -> List[SearchDocument]:
    """
    Keyword search for the public listing page.

    Every keyword has to appear somewhere in the listing's text. When the
    query names a seat count, the seat count alone decides.
    """
    query = (query or "").strip().lower()
    if not query:
        return list(docs)

    seats = parse_seat_query(query)
    if seats is not None:
        return [d for d in docs if d.seats == seats]

    keywords = query.split()
    return [d for d in docs if all(k in _haystack(d) for k in keywords)]


_PRICE_RANGE = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*-\s*(\d+(?:\.\d+)?)\s*$")

PRICE_RANGES = ["0-3000", "3000-12000", "12000-50000"]


def parse_price_range(value: Optional[str]) -> Optional[Tuple[float, float]]:
    """ "3000-12000" -> (3000.0, 12000.0); anything else -> None"""
    match = _PRICE_RANGE.match(value or "")
    if not match:
        return None
    return float(match.group(1)), float(match.group(2))


@dataclass
class CatalogFilters:
    """Facet dropdown values; empty means "any" """
    make: str = ""
    model: str = ""
    type: str = ""
    color: str = ""
    location: str = ""
    fuel_type: str = ""
    price_range: str = ""

    def apply(self, docs: Sequence[SearchDocument]) -> List[SearchDocument]:
        def name(option):
            return (option.name or "").lower() if option else ""

        result = list(docs)
        if self.make:
            result = [d for d in result if name(d.make) == self.make.lower()]
        if self.model:
            result = [d for d in result if d.model == self.model]
        if self.type:
            result = [d for d in result if name(d.body_type) == self.type.lower()]
        if self.color:
            result = [d for d in result if d.color == self.color]
        if self.location:
            result = [d for d in result if d.location == self.location]
        if self.fuel_type:
            result = [d for d in result if name(d.fuel_type) == self.fuel_type.lower()]

        bounds = parse_price_range(self.price_range)
        if bounds:
            low, high = bounds
            result = [d for d in result if d.price is not None and low <= d.price <= high]
        return result


def facet_options(docs: Sequence[SearchDocument]) -> Dict[str, List[str]]:
    """Distinct dropdown values present in the data, in first-seen order"""
    def unique(values):
        return list(dict.fromkeys(v for v in values if v))

    return {
        "makes": unique(d.make.name if d.make else None for d in docs),
        "models": unique(d.model for d in docs),
        "types": unique(d.body_type.name if d.body_type else None for d in docs),
        "fuel_types": unique(d.fuel_type.name if d.fuel_type else None for d in docs),
        "colors": unique(d.color for d in docs),
        "locations": unique(d.location for d in docs),
        "prices": list(PRICE_RANGES),
    }


MAKE_PRIORITY = ["Toyota", "Honda", "Mitsubishi", "Suzuki", "Nissan", "Isuzu", "Benz", "BMW"]


def sort_by_make_priority(docs: Sequence[SearchDocument], priority: Sequence[str] = MAKE_PRIORITY) -> List[SearchDocument]:
    """Popular makes first in `priority` order; everything else keeps its order."""
    rank = {make: i for i, make in enumerate(priority)}
    return sorted(docs, key=lambda d: rank.get(d.make.name if d.make else None, len(rank)))


def price_badge(price: Optional[float]) -> Optional[str]:
    if price is None:
        return None
    if price < 10000:
        return "Best Deal"
    if price < 25000:
        return "Great Price"
    if price < 40000:
        return "Good Value"
    return None


def parse_mileage(mileage) -> Tuple[Optional[float], str]:
    """
    Split a mileage into (value, unit).

    Numbers are miles. Strings take their leading number (commas dropped)
    and are km when the text mentions "km".
    """
    if isinstance(mileage, (int, float)) and not isinstance(mileage, bool):
        return float(mileage), "miles"
    if isinstance(mileage, str):
        text = mileage.strip()
        match = re.match(r"^([\d,.]+)", text)
        value = None
        if match:
            try:
                value = float(match.group(1).replace(",", ""))
            except ValueError:
                value = None
        return value, "km" if "km" in text.lower() else "miles"
    return None, "miles"


@dataclass
class ListingStats:
    total_value: float = 0.0
    count: int = 0
    makes: int = 0


def listing_stats(listings: Sequence[AdminListing], total_items: Optional[int] = None) -> ListingStats:
    """Header numbers for the ingestion screens"""
    return ListingStats(
        total_value=sum(l.price or 0 for l in listings),
        count=total_items if total_items is not None else len(listings),
        makes=len({l.make for l in listings}),
    )
