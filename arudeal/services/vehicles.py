"""
Vehicle Service
===============
Inventory listings (/car_listing/*) and the lookup tables used by the
vehicle forms.
"""

from typing import Any, Dict, List, Optional, Sequence

from ..api.client import ApiClient
from ..schema.forms import VehicleStatusUpdate
from ..schema.listing import Option, Page, Vehicle
from ..utils.logger import get_logger

logger = get_logger(__name__)


class VehicleService:
    """
    CRUD and status operations on inventory listings.

    Every method is a single request; callers refetch afterwards.
    """

    def __init__(self, client: ApiClient):
        self.client = client

    def list(self, page: int = 1, size: int = 12) -> Page:
        data = self.client.get(
            "/car_listing/listing",
            params={"page": page, "size": size},
            error_message="Failed to load vehicles",
        )
        return Page.from_api(data or {}, parse=Vehicle.from_api, page=page, size=size)

    def get(self, slug: str) -> Vehicle:
        data = self.client.get(f"/car_listing/get_car/{slug}", error_message="Vehicle not found")
        return Vehicle.from_api(data or {})

    def create(self, form: Dict[str, Any], images: Sequence[Any] = ()) -> Any:
        """
        Create a listing.

        Args:
            form: Text fields of the listing form
            images: (filename, fileobj, content_type) tuples, sent as "images"
        """
        files = [("images", image) for image in images] or None
        return self.client.post(
            "/car_listing/create",
            data=form,
            files=files,
            error_message="Failed to create vehicle",
        )

    def update(self, vehicle_id: str, payload: Dict[str, Any]) -> Any:
        return self.client.put(
            f"/car_listing/update/{vehicle_id}",
            json=payload,
            error_message="Failed to update vehicle",
        )

    def update_images(self, **params) -> Any:
        """
        Image maintenance; the backend keys off whichever params are sent:
        image_id + make_primary, image_id + mark_not_to_show, or
        image_id + new_position.
        """
        return self.client.put(
            "/car_listing/update_images",
            params=params,
            error_message="Failed to update images",
        )

    def make_primary_image(self, image_id: str) -> Any:
        return self.update_images(image_id=image_id, make_primary=True)

    def hide_image(self, image_id: str) -> Any:
        return self.update_images(image_id=image_id, mark_not_to_show=True, make_primary=False)

    def reorder_images(self, image_ids: List[str]) -> None:
        """Persist a new image order, one request per image."""
        for position, image_id in enumerate(image_ids):
            self.update_images(image_id=image_id, new_position=position)

    def set_status(self, update: VehicleStatusUpdate) -> Any:
        return self.client.put(
            "/car_listing/status",
            params=update.to_params(),
            error_message="Failed to update status",
        )

    def delete(self, vehicle_id: str) -> Any:
        return self.client.delete(
            "/car_listing/delete",
            params={"id": vehicle_id},
            error_message="Failed to delete vehicle",
        )

    def batch_delete(self, ids: Sequence[str]) -> Any:
        logger.info("Batch deleting %d vehicles", len(ids))
        return self.client.delete(
            "/car_listing/batch-delete",
            json=list(ids),
            error_message="Failed to delete vehicles",
        )

    def batch_status(self, ids: Sequence[str], is_sold: Optional[bool] = None) -> Any:
        """Mark many listings sold (is_sold=True) or back to active (False)."""
        logger.info("Batch status is_sold=%s for %d vehicles", is_sold, len(ids))
        return self.client.put(
            "/car_listing/batch-status",
            json=list(ids),
            params={"is_sold": is_sold},
            error_message="Failed to update vehicles",
        )

    def upload_images(self, vehical_id: str, images: Sequence[Any]) -> Any:
        files = [("images", image) for image in images]
        return self.client.post(
            "/car_listing/upload-images",
            params={"vehical_id": vehical_id},
            files=files,
            error_message="Failed to upload images",
        )


class LookupService:
    """Make / body type / fuel type / transmission / badge tables"""

    ENDPOINTS = {
        "makes": "/make/get_all",
        "bodytypes": "/bodytype/get_all",
        "fueltypes": "/fueltype/get_all",
        "transmissions": "/transmission/get_all",
        "badges": "/badge/get_all",
    }

    def __init__(self, client: ApiClient):
        self.client = client

    def get(self, kind: str) -> List[Option]:
        if kind not in self.ENDPOINTS:
            raise ValueError(f"Unknown lookup: {kind}")
        data = self.client.get(self.ENDPOINTS[kind], error_message=f"Failed to load {kind}")
        if isinstance(data, dict):
            data = data.get("items") or []
        return [Option.from_api(item) for item in data or []]

    def makes(self) -> List[Option]:
        return self.get("makes")

    def bodytypes(self) -> List[Option]:
        return self.get("bodytypes")

    def fueltypes(self) -> List[Option]:
        return self.get("fueltypes")

    def transmissions(self) -> List[Option]:
        return self.get("transmissions")

    def badges(self) -> List[Option]:
        return self.get("badges")
