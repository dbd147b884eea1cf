"""Handler layer for HTTP endpoints.

Handlers depend on services (business logic), not directly on repositories.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)
"""

from .cache_handler import CacheHandler
from .data_handler import CACHE_HEADER, DataHandler
from .health_handler import ROOT_TEXT, HealthHandler

__all__ = [
    "CACHE_HEADER",
    "ROOT_TEXT",
    "CacheHandler",
    "DataHandler",
    "HealthHandler",
]
