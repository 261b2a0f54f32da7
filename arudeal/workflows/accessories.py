"""
Accessory Manager
=================
Accessory list with category filter and the create/edit dialog.
"""

from typing import Any, List, Optional, Sequence

from .base import ActionResult, Screen
from ..api.errors import FormValidationError
from ..notifications.notification_manager import NotificationManager
from ..schema.forms import AccessoryForm
from ..schema.listing import Accessory, AccessoryCategory
from ..services.accessories import AccessoryService
from ..views.filters import filter_accessories


class AccessoryManagerScreen(Screen):
    def __init__(self, service: AccessoryService, notifier: Optional[NotificationManager] = None):
        super().__init__(notifier)
        self.service = service
        self.accessories: List[Accessory] = []
        self.categories: List[AccessoryCategory] = []
        self.sub_categories: List[AccessoryCategory] = []

        self.search_text = ""
        self.category_filter: Optional[str] = None

        # dialog state
        self.form = AccessoryForm()
        self.editing_id: Optional[str] = None

    def load(self) -> ActionResult:
        result = self.run(
            "load_accessories",
            lambda: self.service.list(page=1, size=20),
            error_message="Failed to load accessories",
        )
        if result.success:
            self.accessories = result.data.items
        return result

    def load_categories(self) -> ActionResult:
        result = self.run("load_categories", self.service.categories)
        if result.success:
            self.categories = result.data
        return result

    @property
    def visible(self) -> List[Accessory]:
        return filter_accessories(self.accessories, self.search_text, self.category_filter)

    # Dialog

    def open_new(self):
        self.form = AccessoryForm()
        self.editing_id = None
        self.sub_categories = []

    def open_edit(self, accessory: Accessory):
        self.form = AccessoryForm(
            name=accessory.name,
            brand=accessory.brand or "",
            price=accessory.price,
            stock=accessory.stock,
            category_id=accessory.category_id,
            sub_category_id=accessory.sub_category_id,
            description=accessory.description,
            tags=list(accessory.tags),
            model_compatibility=list(accessory.model_compatibility),
        )
        self.editing_id = accessory.id
        self.select_category(accessory.category_id, keep_sub_category=True)

    def select_category(self, category_id: Optional[str], keep_sub_category: bool = False) -> ActionResult:
        """Pick the form's category; its sub-categories are reloaded."""
        self.form.category_id = category_id
        if not keep_sub_category:
            self.form.sub_category_id = None

        result = self.run("load_sub_categories", lambda: self.service.sub_categories(category_id))
        self.sub_categories = result.data if result.success else []
        return result

    def save(self, images: Sequence[Any] = ()) -> ActionResult:
        """
        Create or update from the dialog form.

        Missing name, brand or category: nothing is sent.
        """
        missing = self.form.missing_fields()
        if missing:
            return self.reject("save_accessory", str(FormValidationError(missing)))

        result = self.run(
            "save_accessory",
            lambda: self.service.save(self.form, images=images, accessory_id=self.editing_id),
            success_message=lambda _: "Accessory updated" if self.editing_id else "Accessory created",
        )
        if result.success:
            self.open_new()
            self.load()
        return result

    def delete(self, accessory_id: str) -> ActionResult:
        result = self.run(
            "delete_accessory",
            lambda: self.service.delete(accessory_id),
            success_message=lambda _: "Accessory deleted",
        )
        if result.success:
            self.load()
        return result
