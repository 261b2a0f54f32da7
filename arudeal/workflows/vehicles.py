"""
Vehicle Manager
===============
Admin inventory screen: search, page, select, and change listing status.

Every mutation is followed by a refetch of the whole list.
"""

from typing import Any, Dict, List, Optional, Sequence

from .base import ActionResult, Screen
from ..notifications.notification_manager import NotificationManager
from ..schema.forms import VehicleStatusUpdate
from ..schema.listing import Vehicle
from ..services.vehicles import VehicleService
from ..views.filters import vehicle_matches
from ..views.pipeline import ListView
from ..views.selection import Selection

FETCH_SIZE = 1000


class VehicleManagerScreen(Screen):
    def __init__(
        self,
        service: VehicleService,
        notifier: Optional[NotificationManager] = None,
        page_size: int = 12,
    ):
        super().__init__(notifier)
        self.service = service
        self.view: ListView[Vehicle] = ListView(
            matches=vehicle_matches,
            page_size=page_size,
            date=lambda v: v.created_at,
            empty_message="No vehicles found",
        )
        self.selection = Selection()

    def load(self) -> ActionResult:
        """Fetch the full inventory into the view."""
        result = self.run(
            "load_vehicles",
            lambda: self.service.list(page=1, size=FETCH_SIZE),
            error_message="Failed to load vehicles",
        )
        if result.success:
            self.view.set_items(result.data.items)
        return result

    def search(self, text: str):
        self.view.set_query(text)

    @property
    def vehicles(self) -> List[Vehicle]:
        return self.view.rows

    def _selected(self) -> List[Vehicle]:
        return [v for v in self.view.items if v.id in self.selection]

    @property
    def all_selected_sold(self) -> bool:
        selected = self._selected()
        return bool(selected) and all(v.is_sold for v in selected)

    @property
    def all_selected_active(self) -> bool:
        selected = self._selected()
        return bool(selected) and all(not v.is_sold for v in selected)

    @property
    def has_mixed_status(self) -> bool:
        selected = self._selected()
        return any(v.is_sold for v in selected) and any(not v.is_sold for v in selected)

    # Single-listing actions

    def set_sold(self, vehicle_id: str, sold: bool = True) -> ActionResult:
        result = self.run(
            "set_sold",
            lambda: self.service.set_status(VehicleStatusUpdate(id=vehicle_id, is_sold=sold)),
            success_message=lambda _: "Vehicle marked as sold" if sold else "Vehicle marked as unsold",
            error_message="Failed to update status",
        )
        if result.success:
            self.load()
        return result

    def set_active(self, vehicle_id: str, active: bool = True) -> ActionResult:
        result = self.run(
            "set_active",
            lambda: self.service.set_status(VehicleStatusUpdate(id=vehicle_id, in_active=not active)),
            success_message=lambda _: "Vehicle activated" if active else "Vehicle deactivated",
            error_message="Failed to update status",
        )
        if result.success:
            self.load()
        return result

    def set_featured(self, vehicle_id: str, featured: bool = True) -> ActionResult:
        result = self.run(
            "set_featured",
            lambda: self.service.set_status(VehicleStatusUpdate(id=vehicle_id, is_feature=featured)),
            success_message=lambda _: "Vehicle featured" if featured else "Vehicle unfeatured",
            error_message="Failed to update status",
        )
        if result.success:
            self.load()
        return result

    def delete(self, vehicle_id: str) -> ActionResult:
        result = self.run(
            "delete_vehicle",
            lambda: self.service.delete(vehicle_id),
            success_message=lambda _: "Vehicle deleted successfully",
            error_message="Failed to delete vehicle",
        )
        if result.success:
            self.selection.ids.discard(vehicle_id)
            self.load()
        return result

    # Batch actions

    def _batch(self, action: str, call, done: str) -> ActionResult:
        if not self.selection:
            return self.reject(action, "Please select vehicles first")

        ids = self.selection.to_list()
        result = self.run(action, lambda: call(ids), success_message=lambda _: done.format(n=len(ids)))
        if result.success:
            self.selection.clear()
            self.load()
        return result

    def batch_mark_sold(self) -> ActionResult:
        return self._batch(
            "batch_mark_sold",
            lambda ids: self.service.batch_status(ids, is_sold=True),
            "{n} vehicle(s) marked as sold",
        )

    def batch_mark_active(self) -> ActionResult:
        return self._batch(
            "batch_mark_active",
            lambda ids: self.service.batch_status(ids, is_sold=False),
            "{n} vehicle(s) marked as active",
        )

    def batch_delete(self) -> ActionResult:
        return self._batch(
            "batch_delete",
            self.service.batch_delete,
            "{n} vehicle(s) deleted",
        )

    # Create / edit

    def create(self, form: Dict[str, Any], images: Sequence[Any] = ()) -> ActionResult:
        result = self.run(
            "create_vehicle",
            lambda: self.service.create(form, images),
            success_message=lambda _: "Created",
            error_message="Failed to create",
        )
        if result.success:
            self.load()
        return result

    def update(self, vehicle_id: str, payload: Dict[str, Any], vehical_id: Optional[str] = None,
               images: Sequence[Any] = ()) -> ActionResult:
        """Save edits, then upload any new images for the listing."""
        result = self.run(
            "update_vehicle",
            lambda: self.service.update(vehicle_id, payload),
            error_message="Failed to update",
        )
        if not result.success:
            return result

        if images and vehical_id:
            upload = self.run(
                "upload_images",
                lambda: self.service.upload_images(vehical_id, images),
                error_message="Vehicle details updated but image upload failed",
            )
            if not upload.success:
                self.load()
                return upload

        self.notifier.success("Updated successfully")
        self.load()
        return result
