"""
Taxonomy & Banner Services
==========================
Lookup tables the admin maintains by hand (makes, models, engines, fuel
types, transmissions, body types) and the home-page banners.

The taxonomy endpoints grew up at different times, so each kind carries its
own routes, update verb and body encoding in a TaxonomyKind entry.
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ..api.client import ApiClient
from ..api.errors import FormValidationError
from ..schema.forms import BannerForm, TaxonomyForm
from ..schema.listing import Banner, TaxonomyItem
from ..utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class TaxonomyKind:
    """Routes and encoding for one taxonomy table"""
    label: str
    list_endpoint: str
    create_endpoint: str
    update_endpoint: str
    delete_endpoint: str
    id_in_query: bool = False      # ?id= rather than a {id} path segment
    update_method: str = "PATCH"
    multipart: bool = False
    image_field: Optional[str] = None
    image_required: bool = False   # on create only
    requires_make: bool = False

    @property
    def noun(self) -> str:
        return self.label.lower()

    def item_route(self, endpoint: str, item_id: str) -> Dict[str, Any]:
        """Endpoint and params addressing one row"""
        if self.id_in_query:
            return {"endpoint": endpoint, "params": {"id": item_id}}
        return {"endpoint": endpoint.format(id=item_id)}


TAXONOMIES: Dict[str, TaxonomyKind] = {
    "makes": TaxonomyKind(
        label="Car Make",
        list_endpoint="/makes/list-makes",
        create_endpoint="/makes/add-make",
        update_endpoint="/makes/update-make/{id}",
        delete_endpoint="/makes/delete-make/{id}",
        multipart=True,
        image_field="logo",
        image_required=True,
    ),
    "models": TaxonomyKind(
        label="Car Model",
        list_endpoint="/models/list-models",
        create_endpoint="/models/add-model",
        update_endpoint="/models/update-model/{id}",
        delete_endpoint="/models/delete-model/{id}",
        multipart=True,
        requires_make=True,
    ),
    "engines": TaxonomyKind(
        label="Engine",
        list_endpoint="/engines/list-engines",
        create_endpoint="/engines/add-engine",
        update_endpoint="/engines/update-engine/{id}",
        delete_endpoint="/engines/delete-engine/{id}",
    ),
    "fuel-types": TaxonomyKind(
        label="Fuel type",
        list_endpoint="/fuel-types/list-fuel-types",
        create_endpoint="/fuel-types/add-fuel-type",
        update_endpoint="/fuel-types/update-fuel-type/{id}",
        delete_endpoint="/fuel-types/delete-fuel-type/{id}",
    ),
    "transmissions": TaxonomyKind(
        label="Transmission",
        list_endpoint="/transmissions/list-transmissions",
        create_endpoint="/transmissions/add-transmission",
        update_endpoint="/transmissions/v1/update-transmission/{id}",
        delete_endpoint="/transmissions/delete-transmission/{id}",
    ),
    "body-types": TaxonomyKind(
        label="Body type",
        list_endpoint="/bodytype/get_all",
        create_endpoint="/bodytype/create",
        update_endpoint="/bodytype/update",
        delete_endpoint="/bodytype/delete",
        id_in_query=True,
        update_method="PUT",
        multipart=True,
        image_field="image",
        image_required=True,
    ),
}


def _rows(data: Any) -> List[Dict[str, Any]]:
    # the newer endpoints wrap their rows in {"data": [...]}
    if isinstance(data, dict):
        data = data.get("data")
    return data if isinstance(data, list) else []


class TaxonomyService:
    """CRUD for one taxonomy table"""

    def __init__(self, client: ApiClient, kind: TaxonomyKind):
        self.client = client
        self.kind = kind

    @classmethod
    def for_name(cls, client: ApiClient, name: str) -> "TaxonomyService":
        try:
            return cls(client, TAXONOMIES[name])
        except KeyError:
            raise ValueError(f"Unknown taxonomy: {name} (choose from {', '.join(TAXONOMIES)})") from None

    def list(self) -> List[TaxonomyItem]:
        data = self.client.get(self.kind.list_endpoint, error_message=f"Failed to load {self.kind.noun}s")
        return [TaxonomyItem.from_api(row) for row in _rows(data)]

    def missing_fields(self, form: TaxonomyForm, image: Any = None, creating: bool = True) -> List[str]:
        missing = form.missing_fields(requires_make=self.kind.requires_make)
        if creating and self.kind.image_required and image is None:
            missing.append(self.kind.image_field)
        return missing

    def _body(self, form: TaxonomyForm, image: Any) -> Dict[str, Any]:
        if not self.kind.multipart:
            return {"json": form.to_payload()}
        files = [(self.kind.image_field, image)] if image is not None and self.kind.image_field else None
        return {"data": form.to_payload(), "files": files}

    def create(self, form: TaxonomyForm, image: Any = None) -> Any:
        """
        Add a row.

        Raises:
            FormValidationError: name (or make / image where the table needs
                one) missing; no request is issued
        """
        missing = self.missing_fields(form, image, creating=True)
        if missing:
            raise FormValidationError(missing)

        logger.info("Adding %s %r", self.kind.noun, form.name)
        return self.client.post(
            self.kind.create_endpoint,
            error_message=f"Failed to add {self.kind.noun}",
            **self._body(form, image),
        )

    def update(self, item_id: str, form: TaxonomyForm, image: Any = None) -> Any:
        missing = self.missing_fields(form, image, creating=False)
        if missing:
            raise FormValidationError(missing)

        logger.info("Updating %s %s", self.kind.noun, item_id)
        return self.client.request_json(
            self.kind.update_method,
            error_message=f"Failed to update {self.kind.noun}",
            **self.kind.item_route(self.kind.update_endpoint, item_id),
            **self._body(form, image),
        )

    def delete(self, item_id: str) -> Any:
        logger.info("Deleting %s %s", self.kind.noun, item_id)
        return self.client.delete(
            error_message=f"Failed to delete {self.kind.noun}",
            **self.kind.item_route(self.kind.delete_endpoint, item_id),
        )


class BannerService:
    def __init__(self, client: ApiClient):
        self.client = client

    def list(self) -> List[Banner]:
        data = self.client.get("/banner/get_all", error_message="Failed to load banners")
        return [Banner.from_api(row) for row in _rows(data)]

    def create(self, form: BannerForm, image: Any = None) -> Any:
        missing = form.missing_fields() + ([] if image is not None else ["image"])
        if missing:
            raise FormValidationError(missing)

        logger.info("Creating banner %r", form.name)
        return self.client.post(
            "/banner/create",
            data=form.to_form_data(),
            files=[("image", image)],
            error_message="Failed to add banner",
        )

    def update(self, banner_id: str, form: BannerForm, image: Any = None) -> Any:
        """JSON update, or multipart (`data` JSON string + image) when a new image is given."""
        missing = form.missing_fields()
        if missing:
            raise FormValidationError(missing)

        logger.info("Updating banner %s", banner_id)
        if image is None:
            return self.client.put(
                "/banner/update",
                params={"id": banner_id},
                json=form.to_body(),
                error_message="Failed to update banner",
            )
        return self.client.put(
            "/banner/update",
            params={"id": banner_id},
            data={"data": json.dumps(form.to_body())},
            files=[("image", image)],
            error_message="Failed to update banner",
        )

    def delete(self, banner_id: str) -> Any:
        return self.client.delete(
            "/banner/delete",
            params={"id": banner_id},
            error_message="Failed to delete banner",
        )
