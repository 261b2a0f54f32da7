"""
Taxonomy & Banner Screens
=========================
Add / edit / delete dialogs for the lookup tables and home-page banners.
Every successful mutation refetches the list.
"""

from typing import Any, List, Optional

from .base import ActionResult, Screen
from ..notifications.notification_manager import NotificationManager
from ..schema.forms import BannerForm, TaxonomyForm
from ..schema.listing import Banner, TaxonomyItem
from ..services.taxonomy import BannerService, TaxonomyService

FIELD_MESSAGES = {
    "name": "Name is required",
    "make_id": "Make is required",
    "logo": "Image is required",
    "image": "Image is required",
}


class TaxonomyScreen(Screen):
    def __init__(self, service: TaxonomyService, notifier: Optional[NotificationManager] = None):
        super().__init__(notifier)
        self.service = service
        self.items: List[TaxonomyItem] = []

        self.form = TaxonomyForm()
        self.editing_id: Optional[str] = None

    @property
    def label(self) -> str:
        return self.service.kind.label

    def load(self) -> ActionResult:
        result = self.run("load_taxonomy", self.service.list)
        if result.success:
            self.items = result.data
        return result

    def open_new(self):
        self.form = TaxonomyForm()
        self.editing_id = None

    def open_edit(self, item: TaxonomyItem):
        self.form = TaxonomyForm(name=item.name, make_id=item.make_id)
        self.editing_id = item.id

    def save(self, image: Any = None) -> ActionResult:
        """Add or update from the dialog; a missing field is rejected locally."""
        creating = self.editing_id is None
        missing = self.service.missing_fields(self.form, image, creating=creating)
        if missing:
            return self.reject("save_taxonomy", FIELD_MESSAGES.get(missing[0], "Validation failed"))

        if creating:
            call = lambda: self.service.create(self.form, image=image)
            done = f"{self.label} added successfully"
        else:
            editing_id = self.editing_id
            call = lambda: self.service.update(editing_id, self.form, image=image)
            done = f"{self.label} updated successfully"

        result = self.run("save_taxonomy", call, success_message=lambda _: done)
        if result.success:
            self.open_new()
            self.load()
        return result

    def delete(self, item_id: str) -> ActionResult:
        result = self.run(
            "delete_taxonomy",
            lambda: self.service.delete(item_id),
            success_message=lambda _: f"{self.label} deleted successfully",
        )
        if result.success:
            self.load()
        return result


class BannerScreen(Screen):
    def __init__(self, service: BannerService, notifier: Optional[NotificationManager] = None):
        super().__init__(notifier)
        self.service = service
        self.banners: List[Banner] = []

        self.form = BannerForm()
        self.editing_id: Optional[str] = None

    def load(self) -> ActionResult:
        result = self.run("load_banners", self.service.list)
        if result.success:
            self.banners = sorted(result.data, key=lambda b: (b.position is None, b.position or 0))
        return result

    def open_new(self):
        self.form = BannerForm()
        self.editing_id = None

    def open_edit(self, banner: Banner):
        self.form = BannerForm(name=banner.name, position=banner.position, details=dict(banner.details))
        self.editing_id = banner.id

    def save(self, image: Any = None) -> ActionResult:
        if self.form.missing_fields():
            return self.reject("save_banner", FIELD_MESSAGES["name"])
        if self.editing_id is None and image is None:
            return self.reject("save_banner", FIELD_MESSAGES["image"])

        if self.editing_id is None:
            call = lambda: self.service.create(self.form, image=image)
            done = "Banner added successfully"
        else:
            editing_id = self.editing_id
            call = lambda: self.service.update(editing_id, self.form, image=image)
            done = "Banner updated successfully"

        result = self.run("save_banner", call, success_message=lambda _: done)
        if result.success:
            self.open_new()
            self.load()
        return result

    def delete(self, banner_id: str) -> ActionResult:
        result = self.run(
            "delete_banner",
            lambda: self.service.delete(banner_id),
            success_message=lambda _: "Banner deleted successfully",
        )
        if result.success:
            self.load()
        return result
