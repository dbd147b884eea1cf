"""Repository layer for data access.

This layer hides PostgreSQL and Redis behind the protocol interfaces in
``kuberly_app.protocols``. The repositories are protocol-based (structural
typing), not inheritance-based.
"""

from kuberly_app.protocols import CacheStore, RecordStore

from .postgres_repository import PostgresRecordRepository
from .redis_repository import RedisCacheRepository

__all__ = [
    "CacheStore",
    "RecordStore",
    "PostgresRecordRepository",
    "RedisCacheRepository",
]
