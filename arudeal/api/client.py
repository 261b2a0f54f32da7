"""
Backend API Client
==================
Thin wrapper around requests.Session for the dealership backend.

Every request:
- resolves relative endpoints against the base URL
- reads the bearer token from the token store at call time
- turns connection failures into NetworkError
- on 401 for an authenticated call, clears the session and raises
  SessionExpiredError
- on any other non-2xx, raises ApiError carrying the backend's detail
"""

from typing import Any, Dict, Optional

import requests

from .errors import ApiError, NetworkError, SessionExpiredError
from .token_store import TokenStore
from ..utils.logger import get_logger

logger = get_logger(__name__)


class ApiClient:
    """
    Bearer-token JSON client.

    Args:
        base_url: Backend root, e.g. "https://api.example.com"
        token_store: Where the access token lives (None = anonymous)
        media_url: Prefix for relative image paths
        timeout: Seconds per request, None waits indefinitely
        session: Injected requests.Session (tests pass a fake)
    """

    def __init__(
        self,
        base_url: str,
        token_store: Optional[TokenStore] = None,
        media_url: str = "",
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.token_store = token_store or TokenStore()
        self.media_url = media_url or ""
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_config(cls, settings, base_url: Optional[str] = None, **kwargs) -> "ApiClient":
        """Create a client from a settings object (API_URL, MEDIA_URL, TOKEN_FILE, REQUEST_TIMEOUT)."""
        return cls(
            base_url or settings.API_URL,
            token_store=TokenStore(settings.TOKEN_FILE),
            media_url=settings.MEDIA_URL,
            timeout=settings.REQUEST_TIMEOUT,
            **kwargs,
        )

    def _get_headers(self, skip_auth: bool = False, json_body: bool = True) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if json_body:
            headers["Content-Type"] = "application/json"

        if not skip_auth:
            token = self.token_store.access_token
            if token:
                headers["Authorization"] = f"Bearer {token}"
        return headers

    def _get_api_endpoint(self, endpoint: str) -> str:
        if endpoint.startswith("http://") or endpoint.startswith("https://"):
            return endpoint
        return f"{self.base_url}/{endpoint.lstrip('/')}"

    def media(self, path: Optional[str]) -> Optional[str]:
        """Absolute URL for an image path returned by the backend."""
        if not path:
            return None
        if path.startswith("http"):
            return path
        if not self.media_url:
            return path
        return f"{self.media_url.rstrip('/')}/{path.lstrip('/')}"

    def request(
        self,
        method: str,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
        data: Optional[Dict[str, Any]] = None,
        files: Any = None,
        skip_auth: bool = False,
        error_message: str = "Request failed",
    ) -> requests.Response:
        """
        Issue a request and return the response.

        Raises:
            NetworkError: connection failure
            SessionExpiredError: 401 on an authenticated request
            ApiError: any other non-2xx status
        """
        url = self._get_api_endpoint(endpoint)
        # multipart bodies need requests to set the boundary header itself
        headers = self._get_headers(skip_auth=skip_auth, json_body=files is None and data is None)

        try:
            response = self.session.request(
                method,
                url,
                headers=headers,
                params=_clean_params(params),
                json=json,
                data=data,
                files=files,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error("API request failed: %s %s: %s", method, url, e)
            raise NetworkError() from e

        if response.status_code == 401 and not skip_auth:
            logger.warning("Session expired on %s %s", method, url)
            self.token_store.clear()
            raise SessionExpiredError()

        if not 200 <= response.status_code < 300:
            error = ApiError.from_response(response, default=error_message)
            logger.warning("%s %s -> %s: %s", method, url, response.status_code, error.message)
            raise error

        return response

    def request_json(self, method: str, endpoint: str, **kwargs) -> Any:
        """Like request(), but decode the JSON body (None for empty bodies)."""
        response = self.request(method, endpoint, **kwargs)
        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return None

    def get(self, endpoint: str, **kwargs) -> Any:
        return self.request_json("GET", endpoint, **kwargs)

    def post(self, endpoint: str, **kwargs) -> Any:
        return self.request_json("POST", endpoint, **kwargs)

    def put(self, endpoint: str, **kwargs) -> Any:
        return self.request_json("PUT", endpoint, **kwargs)

    def patch(self, endpoint: str, **kwargs) -> Any:
        return self.request_json("PATCH", endpoint, **kwargs)

    def delete(self, endpoint: str, **kwargs) -> Any:
        return self.request_json("DELETE", endpoint, **kwargs)


def _clean_params(params: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Drop None values and render booleans the way the backend expects ("true"/"false")."""
    if not params:
        return None
    cleaned = {}
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        cleaned[key] = value
    return cleaned
