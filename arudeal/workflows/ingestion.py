"""
Ingestion Dashboards
====================
Third-party and auction listing screens.

Both share one shape: a server-paged list mapped into AdminListing rows,
client-side search over title/make/model, header stats, and an import
job trigger. The auction screen adds saved filters and bulk moderation.

Bulk actions need a non-empty selection and send every id in one
request. A single-row toggle patches the row in place; multi-field bulk
updates refetch and clear the selection.
"""

from typing import BinaryIO, List, Optional, Union

from .base import ActionResult, Screen, response_message
from ..notifications.notification_manager import NotificationManager
from ..schema.forms import AuctionFetchParams, BulkUpdate, ThirdPartyFetchParams
from ..schema.listing import AdminListing, Page, SavedFilter
from ..services.ingestion import AuctionService, ThirdPartyService
from ..views.filters import ListingStats, admin_listing_matches, listing_stats
from ..views.pipeline import ListView, Paginator
from ..views.selection import Selection


class IngestionScreen(Screen):
    """List + search + stats common to both ingestion sources"""

    label = "listings"

    def __init__(self, service, notifier: Optional[NotificationManager] = None, page_size: int = 20):
        super().__init__(notifier)
        self.service = service
        self.pagination = Paginator(page_size=page_size)
        # server pages are searched locally, one page at a time
        self.view: ListView[AdminListing] = ListView(
            matches=admin_listing_matches,
            page_size=page_size,
            empty_message=f"No {self.label} found",
        )
        self.stats = ListingStats()
        self.selection = Selection()

    @property
    def listings(self) -> List[AdminListing]:
        return self.view.filtered

    def load(self, page: int = 1) -> ActionResult:
        result = self.run(
            f"load_{self.label}",
            lambda: self.service.list(page=page, size=self.pagination.page_size),
            error_message=f"Failed to load {self.label}",
        )
        if result.success:
            data: Page = result.data
            self.view.set_items(data.items)
            self.pagination.total_items = data.total_items
            self.pagination.page = data.page or page
            self.stats = listing_stats(data.items, total_items=data.total_items)
        return result

    def go_to(self, page: int) -> Optional[ActionResult]:
        """Load another server page; out-of-range pages do nothing."""
        if page < 1 or page > self.pagination.page_count or page == self.pagination.page:
            return None
        return self.load(page)

    def search(self, text: str):
        self.view.set_query(text)

    def toggle_select_all(self):
        self.selection.toggle_all(l.id for l in self.listings)


class ThirdPartyScreen(IngestionScreen):
    label = "third-party listings"

    def __init__(self, service: ThirdPartyService, notifier: Optional[NotificationManager] = None,
                 page_size: int = 20):
        super().__init__(service, notifier, page_size)
        self.fetch_params = ThirdPartyFetchParams()

    def start_fetch(self, params: Optional[ThirdPartyFetchParams] = None) -> ActionResult:
        params = params or self.fetch_params
        result = self.run(
            "third_party_fetch",
            lambda: self.service.fetch(params),
            success_message=lambda data: response_message(
                data, "Third-party listings fetch started in background!"
            ),
        )
        if result.success:
            self.load(self.pagination.page)
        return result


class AuctionScreen(IngestionScreen):
    label = "auction listings"

    def __init__(self, service: AuctionService, notifier: Optional[NotificationManager] = None,
                 page_size: int = 20):
        super().__init__(service, notifier, page_size)
        self.fetch_params = AuctionFetchParams()
        self.saved_filters: List[SavedFilter] = []
        self.selected_filter_id: Optional[str] = None

    # Saved filters

    def load_filters(self) -> ActionResult:
        result = self.run("load_filters", self.service.list_filters)
        if result.success:
            self.saved_filters = result.data
        return result

    def save_filter(self, title: str) -> ActionResult:
        if not (title or "").strip():
            return self.reject("save_filter", "Please enter a filter title")

        updating = self.selected_filter_id
        result = self.run(
            "save_filter",
            lambda: self.service.save_filter(title, self.fetch_params, filter_id=updating),
            success_message=lambda _: "Filter updated!" if updating else "Filter saved!",
        )
        if result.success:
            self.selected_filter_id = None
            self.load_filters()
        return result

    def delete_filter(self, filter_id: str) -> ActionResult:
        result = self.run(
            "delete_filter",
            lambda: self.service.delete_filter(filter_id),
            success_message=lambda _: "Filter deleted!",
        )
        if result.success:
            if self.selected_filter_id == filter_id:
                self.selected_filter_id = None
            self.load_filters()
        return result

    def apply_filter(self, saved: SavedFilter) -> AuctionFetchParams:
        """Copy a saved filter into the fetch form."""
        self.fetch_params = AuctionFetchParams.from_saved_filter(saved)
        self.selected_filter_id = saved.id
        self.notifier.info(f"Applied filter: {saved.title}")
        return self.fetch_params

    def clear_form(self):
        self.fetch_params = AuctionFetchParams()
        self.selected_filter_id = None
        self.notifier.info("Form cleared")

    # Import

    def execute_fetch(self, seed: Union[str, BinaryIO, None]) -> ActionResult:
        if not seed:
            return self.reject("auction_fetch", "Please upload a CSV file")

        result = self.run(
            "auction_fetch",
            lambda: self.service.fetch(self.fetch_params, seed),
            success_message=lambda data: response_message(
                data, "Copart listings processing started in the background."
            ),
        )
        if result.success:
            self.load(self.pagination.page)
        return result

    # Moderation

    def bulk_update(self, update: Optional[BulkUpdate] = None) -> ActionResult:
        if not self.selection:
            return self.reject("bulk_update", "Please select listings to update")

        update = update or BulkUpdate()
        ids = self.selection.to_list()
        result = self.run(
            "bulk_update",
            lambda: self.service.bulk_update(ids, update),
            success_message=lambda _: "Listings updated successfully",
        )
        if result.success:
            self.selection.clear()
            self.load(self.pagination.page)
        return result

    def bulk_delete(self) -> ActionResult:
        if not self.selection:
            return self.reject("bulk_delete", "Please select listings to delete")

        ids = self.selection.to_list()
        result = self.run(
            "bulk_delete",
            lambda: self.service.bulk_delete(ids),
            success_message=lambda _: f"Successfully deleted {len(ids)} listing(s)",
        )
        if result.success:
            self.selection.clear()
            self.load(self.pagination.page)
        return result

    def toggle_active(self, listing_id: str, is_active: bool) -> ActionResult:
        """Flip one row's active flag; the row is patched, no refetch."""
        result = self.run(
            "toggle_active",
            lambda: self.service.set_active(listing_id, is_active),
            success_message=lambda _: "Listing activated" if is_active else "Listing deactivated",
        )
        if result.success:
            self.view.patch(listing_id, is_active=is_active, is_featured=False)
        return result
