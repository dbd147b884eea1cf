"""KubeRLy Test App - demo service with PostgreSQL storage and a Redis cache.

This package provides a layered architecture:

Layers:
    - protocols: Interface contracts (RecordStore, CacheStore)
    - repositories: PostgreSQL and Redis implementations
    - services: Business logic (cache-aside listing, passthrough, health)
    - handlers: HTTP endpoint handlers
    - dto: Data transfer objects (API contracts)
    - entities: Domain models (internal)

For HTTP API:
    ```python
    from kuberly_app.api.app import app
    ```
"""

from kuberly_app.config import Settings, get_redis_client, get_settings
from kuberly_app.dto import CreateRecordRequest, SetCacheRequest
from kuberly_app.entities import HealthReport, RecordEntity, RecordSnapshot
from kuberly_app.handlers import CacheHandler, DataHandler, HealthHandler
from kuberly_app.protocols import CacheStore, RecordStore
from kuberly_app.repositories import PostgresRecordRepository, RedisCacheRepository
from kuberly_app.services import CacheService, DataService, HealthService

__version__ = "1.0.0"

__all__ = [
    # Configuration
    "Settings",
    "get_settings",
    "get_redis_client",
    # Protocols (interfaces)
    "CacheStore",
    "RecordStore",
    # Services (business logic)
    "CacheService",
    "DataService",
    "HealthService",
    # Handlers (HTTP)
    "CacheHandler",
    "DataHandler",
    "HealthHandler",
    # Repositories (data access)
    "PostgresRecordRepository",
    "RedisCacheRepository",
    # Entities (domain models)
    "HealthReport",
    "RecordEntity",
    "RecordSnapshot",
    # DTOs (API contracts)
    "CreateRecordRequest",
    "SetCacheRequest",
]
