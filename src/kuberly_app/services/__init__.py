"""Service layer for business logic.

Services depend on protocols (interfaces), not concrete implementations,
so tests can hand them in-memory stores.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)

Usage:
    ```python
    from kuberly_app.services import DataService

    service = DataService(store=store, cache=cache)
    ```
"""

from .cache_service import DEFAULT_TTL, CacheService
from .data_service import SNAPSHOT_KEY, SNAPSHOT_TTL, DataService, serialize_records
from .health_service import HealthService

__all__ = [
    "CacheService",
    "DataService",
    "HealthService",
    "DEFAULT_TTL",
    "SNAPSHOT_KEY",
    "SNAPSHOT_TTL",
    "serialize_records",
]
