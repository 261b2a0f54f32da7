"""
Dashboard Service
=================
Admin dashboard summary and the seller's own-listing statistics.
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

from .seller import SellerListingService
from ..api.client import ApiClient
from ..schema.listing import Vehicle

MONTHS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


@dataclass
class MonthlySales:
    month: str
    sold: int = 0
    revenue: float = 0.0


@dataclass
class SellerStats:
    """Numbers shown on the seller dashboard"""
    total_listings: int = 0
    active_listings: int = 0
    sold_listings: int = 0
    total_revenue: float = 0.0
    body_types: List[Tuple[str, int]] = field(default_factory=list)
    makes: List[Tuple[str, int]] = field(default_factory=list)
    monthly_sales: List[MonthlySales] = field(default_factory=list)


def _distribution(names: List[str], top: int = 10) -> List[Tuple[str, int]]:
    counts = Counter(names)
    ranked = sorted(counts.items(), key=lambda kv: kv[1], reverse=True)[:top]
    return [(name[:1].upper() + name[1:], count) for name, count in ranked]


def seller_stats(listings: List[Vehicle]) -> SellerStats:
    """Aggregate a seller's listings into dashboard numbers."""
    sold = [v for v in listings if v.is_sold]

    monthly = {m: MonthlySales(month=m) for m in MONTHS}
    for vehicle in sold:
        when = vehicle.updated_at or vehicle.created_at
        if when is None:
            continue
        bucket = monthly[MONTHS[when.month - 1]]
        bucket.sold += 1
        bucket.revenue += vehicle.price or 0

    return SellerStats(
        total_listings=len(listings),
        active_listings=len([v for v in listings if v.is_active and not v.is_sold]),
        sold_listings=len(sold),
        total_revenue=sum(v.price or 0 for v in sold),
        body_types=_distribution([(v.body_type.name if v.body_type else None) or "Unknown" for v in listings]),
        makes=_distribution([(v.make.name if v.make else None) or "Unknown" for v in listings]),
        monthly_sales=[monthly[m] for m in MONTHS],
    )


class DashboardService:
    def __init__(self, client: ApiClient):
        self.client = client

    def summary(self) -> Dict[str, Any]:
        """Admin dashboard summary, as the backend returns it"""
        return self.client.get("/dashboard/", error_message="Failed to load dashboard") or {}

    def seller_stats(self) -> SellerStats:
        return seller_stats(SellerListingService(self.client).my_listings(size=200))
