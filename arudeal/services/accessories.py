"""
Accessory Service
=================
Car accessories and their categories (/car_accessory/*).
"""

from typing import Any, List, Optional, Sequence

from ..api.client import ApiClient
from ..api.errors import FormValidationError
from ..schema.forms import AccessoryForm
from ..schema.listing import Accessory, AccessoryCategory, Page
from ..utils.logger import get_logger

logger = get_logger(__name__)


class AccessoryService:
    def __init__(self, client: ApiClient):
        self.client = client

    def list(self, page: int = 1, size: int = 20) -> Page:
        data = self.client.get(
            "/car_accessory/",
            params={"page": page, "size": size},
            error_message="Failed to load accessories",
        )
        return Page.from_api(data or {}, parse=Accessory.from_api, page=page, size=size)

    def categories(self) -> List[AccessoryCategory]:
        data = self.client.get("/car_accessory/category/", error_message="Failed to load categories")
        return [AccessoryCategory.from_api(c) for c in data or []]

    def sub_categories(self, category_id: Optional[str]) -> List[AccessoryCategory]:
        """Sub-categories of a category; none without a category."""
        if not category_id:
            return []
        data = self.client.get(
            "/car_accessory/sub-category/",
            params={"category_id": category_id},
            error_message="Failed to load sub-categories",
        )
        return [AccessoryCategory.from_api(c) for c in data or []]

    def save(
        self,
        form: AccessoryForm,
        images: Sequence[Any] = (),
        accessory_id: Optional[str] = None,
    ) -> Any:
        """
        Create (no accessory_id) or update an accessory.

        Raises:
            FormValidationError: name, brand or category missing; no request
                is issued
        """
        missing = form.missing_fields()
        if missing:
            raise FormValidationError(missing)

        files = [("images", image) for image in images] or None
        if accessory_id:
            logger.info("Updating accessory %s", accessory_id)
            return self.client.put(
                f"/car_accessory/update/{accessory_id}",
                data=form.to_form_data(),
                files=files,
                error_message="Failed to save accessory",
            )

        logger.info("Creating accessory %r", form.name)
        return self.client.post(
            "/car_accessory/create",
            data=form.to_form_data(),
            files=files,
            error_message="Failed to save accessory",
        )

    def delete(self, accessory_id: str) -> Any:
        return self.client.delete(
            "/car_accessory/delete",
            params={"id": accessory_id},
            error_message="Failed to delete accessory",
        )
