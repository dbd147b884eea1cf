"""Protocol interfaces for swappable implementations.

Protocols let the services depend on behaviour rather than on Redis or
PostgreSQL directly, so unit tests can inject in-memory implementations.

Usage:
    ```python
    from kuberly_app.protocols import CacheStore, RecordStore

    cache: CacheStore = RedisCacheRepository.create()
    store: RecordStore = PostgresRecordRepository.create()
    ```
"""

from .cache_store import CacheStore
from .record_store import RecordStore

__all__ = [
    "CacheStore",
    "RecordStore",
]
