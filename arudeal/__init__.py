"""
Arudeal
=======
Client toolkit for the Arudeal vehicle marketplace backend.

- api: bearer-token REST client and error types
- schema: view models and request payloads
- adapters: per-source listing normalization
- search: fuzzy catalog search over all listing sources
- views: filter / sort / paginate / select
- services: one class per backend resource
- workflows: admin screens with toast feedback
"""

__version__ = "1.0.0"

from .api import ApiClient, TokenStore, ArudealError, ApiError, NetworkError, SessionExpiredError
from .search import CatalogSearch, FuzzyIndex
from .notifications import NotificationManager

__all__ = [
    "__version__",
    "ApiClient",
    "TokenStore",
    "ArudealError",
    "ApiError",
    "NetworkError",
    "SessionExpiredError",
    "CatalogSearch",
    "FuzzyIndex",
    "NotificationManager",
]
