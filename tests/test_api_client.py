"""
Unit tests for the backend client, token store and error mapping.

Note: session / client / token_store fixtures are provided by conftest.py
"""

from types import SimpleNamespace

import pytest
import requests

from arudeal.api.client import ApiClient, _clean_params
from arudeal.api.errors import (
    ApiError,
    FormValidationError,
    NetworkError,
    SessionExpiredError,
    extract_detail,
)
from arudeal.api.token_store import TokenStore
from config import Config
from conftest import FakeResponse


class TestRequestHeaders:
    """Bearer token and content type handling"""

    def test_bearer_token_sent_on_authenticated_requests(self, client, session):
        session.route("GET", "/car_listing/listing", {"items": []})

        client.get("/car_listing/listing")

        headers = session.calls[0]["headers"]
        assert headers["Authorization"] == "Bearer test-token"
        assert headers["Content-Type"] == "application/json"

    def test_skip_auth_omits_token(self, client, session):
        session.route("GET", "/api_listing/public", {"items": []})

        client.get("/api_listing/public", skip_auth=True)

        assert "Authorization" not in session.calls[0]["headers"]

    def test_token_read_at_call_time(self, client, session, token_store):
        session.route("GET", "/dashboard/", {})
        token_store.set("access_token", "rotated")

        client.get("/dashboard/")

        assert session.calls[0]["headers"]["Authorization"] == "Bearer rotated"

    def test_no_token_means_anonymous(self, session):
        client = ApiClient(session.base_url, session=session)
        session.route("GET", "/dashboard/", {})

        client.get("/dashboard/")

        assert "Authorization" not in session.calls[0]["headers"]

    def test_multipart_leaves_content_type_to_requests(self, client, session):
        session.route("POST", "/car_accessory/create", {"id": "1"})

        client.post("/car_accessory/create", data={"name": "Rack"}, files=[("images", ("a.jpg", b"x", "image/jpeg"))])

        headers = session.calls[0]["headers"]
        assert "Content-Type" not in headers
        assert headers["Authorization"] == "Bearer test-token"


class TestErrorMapping:
    """Failures become toolkit errors"""

    def test_401_clears_session_and_raises(self, client, session, token_store):
        session.route("GET", "/car_listing/listing", FakeResponse(401, {"detail": "Not authenticated"}))

        with pytest.raises(SessionExpiredError):
            client.get("/car_listing/listing")

        assert token_store.access_token is None

    def test_401_on_public_request_keeps_session(self, client, session, token_store):
        session.route("GET", "/api_listing/public", FakeResponse(401, {"detail": "Nope"}))

        with pytest.raises(ApiError) as exc:
            client.get("/api_listing/public", skip_auth=True)

        assert not isinstance(exc.value, SessionExpiredError)
        assert token_store.access_token == "test-token"

    def test_backend_detail_becomes_message(self, client, session):
        session.route("DELETE", "/car_listing/delete", FakeResponse(400, {"detail": "Vehicle is sold"}))

        with pytest.raises(ApiError) as exc:
            client.delete("/car_listing/delete", params={"id": "1"}, error_message="Failed to delete vehicle")

        assert exc.value.status_code == 400
        assert str(exc.value) == "Vehicle is sold"

    def test_default_message_without_detail(self, client, session):
        session.route("PUT", "/car_listing/status", FakeResponse(500, None))

        with pytest.raises(ApiError) as exc:
            client.put("/car_listing/status", error_message="Failed to update status")

        assert exc.value.message == "Failed to update status"

    def test_connection_failure_is_network_error(self, client, session):
        session.route("GET", "/car_listing/listing", requests.ConnectionError("refused"))

        with pytest.raises(NetworkError) as exc:
            client.get("/car_listing/listing")

        assert "Network error" in str(exc.value)

    def test_unrouted_path_is_404(self, client):
        with pytest.raises(ApiError) as exc:
            client.get("/nowhere")
        assert exc.value.status_code == 404
        assert exc.value.message == "Not Found"

    def test_validation_list_detail(self):
        payload = {"detail": [{"loc": ["body", "name"], "msg": "field required"}]}
        assert extract_detail(payload) == "field required"

    def test_message_field_detail(self):
        assert extract_detail({"message": "Already exists"}) == "Already exists"
        assert extract_detail("oops") is None

    def test_form_validation_error_lists_fields(self):
        error = FormValidationError(["name", "brand"])
        assert error.missing == ["name", "brand"]
        assert str(error) == "Missing required field(s): name, brand"


class TestRequestDetails:
    def test_params_drop_none_and_render_booleans(self):
        assert _clean_params({"is_sold": True, "in_active": False, "email": None}) == {
            "is_sold": "true",
            "in_active": "false",
        }
        assert _clean_params({}) is None
        assert _clean_params(None) is None

    def test_relative_and_absolute_endpoints(self, session):
        client = ApiClient("http://backend.test/", session=session)
        assert client._get_api_endpoint("v1/user-roles/list_role") == "http://backend.test/v1/user-roles/list_role"
        assert client._get_api_endpoint("https://other.test/x") == "https://other.test/x"

    def test_empty_body_decodes_to_none(self, client, session):
        session.route("DELETE", "/car_accessory/delete", FakeResponse(204, None))
        assert client.delete("/car_accessory/delete", params={"id": "1"}) is None

    def test_media_urls(self, client):
        assert client.media("/uploads/car.jpg") == "http://media.test/uploads/car.jpg"
        assert client.media("https://cdn.test/car.jpg") == "https://cdn.test/car.jpg"
        assert client.media(None) is None

    def test_timeout_passed_through(self, session):
        client = ApiClient(session.base_url, timeout=5.0, session=session)
        session.route("GET", "/dashboard/", {})
        client.get("/dashboard/")
        assert session.calls[0]["timeout"] == 5.0

    def test_from_config(self, tmp_path):
        settings = SimpleNamespace(
            API_URL="http://env.test",
            MEDIA_URL="http://media.env.test",
            TOKEN_FILE=str(tmp_path / "session.json"),
            REQUEST_TIMEOUT=12.0,
        )

        client = ApiClient.from_config(settings)

        assert client.base_url == "http://env.test"
        assert client.media_url == "http://media.env.test"
        assert client.timeout == 12.0
        assert client.token_store.path == tmp_path / "session.json"

    def test_from_config_base_url_override(self, tmp_path):
        settings = SimpleNamespace(API_URL="http://env.test", MEDIA_URL="", TOKEN_FILE=str(tmp_path / "s.json"), REQUEST_TIMEOUT=None)
        assert ApiClient.from_config(settings, base_url="http://users.test/").base_url == "http://users.test"

    def test_from_app_config(self):
        client = ApiClient.from_config(Config)
        assert client.base_url == Config.API_URL.rstrip("/")
        assert str(client.token_store.path) == Config.TOKEN_FILE


class TestTokenStore:
    def test_file_store_persists_between_instances(self, tmp_path):
        path = tmp_path / "nested" / "session.json"
        TokenStore(str(path)).set("access_token", "abc")

        assert TokenStore(str(path)).access_token == "abc"

    def test_quoted_token_is_unwrapped(self):
        store = TokenStore()
        store.set("access_token", '"abc"')
        assert store.access_token == "abc"

    def test_clear_forgets_session_keys_only(self, tmp_path):
        store = TokenStore(str(tmp_path / "session.json"))
        store.set("access_token", "abc")
        store.set("user", {"id": 1})
        store.set("theme", "dark")

        store.clear()

        assert store.access_token is None
        assert store.get("user") is None
        assert store.get("theme") == "dark"

    def test_corrupt_file_reads_as_empty(self, tmp_path):
        path = tmp_path / "session.json"
        path.write_text("{not json")
        assert TokenStore(str(path)).access_token is None
