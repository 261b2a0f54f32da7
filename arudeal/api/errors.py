"""
Client Errors
=============
Every failure the toolkit surfaces is one of these.

- NetworkError: the request never got a response
- ApiError: the backend answered with a non-2xx status
- SessionExpiredError: the backend rejected the bearer token (401)
- FormValidationError: a required form field is missing, nothing was sent
"""

from typing import Any, List, Optional


class ArudealError(Exception):
    """Base class for all toolkit errors"""


class NetworkError(ArudealError):
    """Raised when the backend cannot be reached"""

    def __init__(self, message: str = "Network error. Please try again later."):
        super().__init__(message)


class ApiError(ArudealError):
    """Non-2xx response from the backend"""

    def __init__(self, status_code: int, message: str, payload: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.payload = payload

    @classmethod
    def from_response(cls, response, default: str = "Request failed") -> "ApiError":
        """Build an error from a requests Response, preferring the backend's detail."""
        try:
            payload = response.json()
        except ValueError:
            payload = None

        message = extract_detail(payload) or default
        return cls(response.status_code, message, payload)

    def __str__(self) -> str:
        return self.message


class SessionExpiredError(ApiError):
    """401 on an authenticated request"""

    def __init__(self):
        super().__init__(401, "Your session has expired. Please log in again.")


class FormValidationError(ArudealError):
    """A required field is missing; raised before any request is made"""

    def __init__(self, missing: List[str]):
        self.missing = missing
        super().__init__(f"Missing required field(s): {', '.join(missing)}")


def extract_detail(payload: Any) -> Optional[str]:
    """
    Pull a human-readable message out of an error body.

    Handles `{"detail": "..."}`, FastAPI validation lists
    (`{"detail": [{"msg": "..."}]}`) and `{"message": "..."}`.
    """
    if not isinstance(payload, dict):
        return None

    detail = payload.get("detail")
    if isinstance(detail, str) and detail:
        return detail
    if isinstance(detail, list) and detail:
        first = detail[0]
        if isinstance(first, dict) and first.get("msg"):
            return str(first["msg"])
        return str(first)

    message = payload.get("message")
    if isinstance(message, str) and message:
        return message
    return None
