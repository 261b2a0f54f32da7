"""REST client for the dealership backend"""

from .client import ApiClient
from .errors import (
    ArudealError,
    ApiError,
    NetworkError,
    SessionExpiredError,
    FormValidationError,
)
from .token_store import TokenStore

__all__ = [
    "ApiClient",
    "TokenStore",
    "ArudealError",
    "ApiError",
    "NetworkError",
    "SessionExpiredError",
    "FormValidationError",
]
