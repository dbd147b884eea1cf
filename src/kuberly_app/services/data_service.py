"""Record service implementing the cache-aside pattern.

Reads check the snapshot cache entry first and fall back to the store,
repopulating the cache on a miss. Writes go to the store and then delete
the snapshot so the next read rebuilds it.
"""

import json

from kuberly_app.entities import RecordEntity, RecordSnapshot
from kuberly_app.protocols import CacheStore, RecordStore
from kuberly_app.utils.logging import get_logger

logger = get_logger(__name__)

SNAPSHOT_KEY = "test_data_cache"
SNAPSHOT_TTL = 300  # 5 minutes


def serialize_records(records: list[RecordEntity]) -> str:
    """Encode records as the JSON array served by the listing endpoints."""
    return json.dumps(
        [
            {
                "id": record.id,
                "name": record.name,
                "data": record.data,
                "created_at": record.created_at.isoformat() if record.created_at else None,
            }
            for record in records
        ]
    )


class DataService:
    """Cache-aside access to the records table.

    Store failures propagate to the caller. Cache failures never do: a
    failed read counts as a miss, and failed population or invalidation is
    logged and ignored.

    Concurrent readers may still see the previous snapshot between a
    writer's insert and its invalidation.

    Example:
        ```python
        service = DataService(store=PostgresRecordRepository.create(),
                              cache=RedisCacheRepository.create())
        service.create_record("test1", "data1")
        snapshot = service.list_records()   # cache_hit=False
        snapshot = service.list_records()   # cache_hit=True
        ```
    """

    def __init__(
        self,
        store: RecordStore,
        cache: CacheStore,
        snapshot_ttl: int = SNAPSHOT_TTL,
    ) -> None:
        """Initialize the data service.

        Args:
            store: Relational record store (source of truth).
            cache: Cache holding the serialized snapshot.
            snapshot_ttl: Expiry of the snapshot entry in seconds.
        """
        self._store = store
        self._cache = cache
        self._snapshot_ttl = snapshot_ttl

    def create_record(self, name: str, data: str | None) -> int:
        """Insert a record and invalidate the snapshot.

        Args:
            name: Record name
            data: Optional payload

        Returns:
            The generated record id
        """
        record_id = self._store.insert(name, data)
        logger.info("Inserted record %s", record_id)
        self._invalidate()
        return record_id

    def list_records(self) -> RecordSnapshot:
        """Return all records, served from the snapshot when present.

        Returns:
            RecordSnapshot with the JSON payload and the HIT/MISS flag
        """
        cached = self._read_snapshot()
        if cached is not None:
            logger.debug("Snapshot cache HIT")
            return RecordSnapshot(payload=cached, cache_hit=True)

        logger.debug("Snapshot cache MISS")
        payload = serialize_records(self._store.list_all())
        self._write_snapshot(payload)
        return RecordSnapshot(payload=payload, cache_hit=False)

    def list_records_uncached(self) -> list[RecordEntity]:
        """Return all records straight from the store."""
        return self._store.list_all()

    def _read_snapshot(self) -> str | None:
        try:
            return self._cache.get(SNAPSHOT_KEY)
        except Exception as e:
            logger.warning("Snapshot read failed, treating as miss: %s", e)
            return None

    def _write_snapshot(self, payload: str) -> None:
        try:
            self._cache.set(SNAPSHOT_KEY, payload, self._snapshot_ttl)
        except Exception as e:
            logger.warning("Snapshot population failed: %s", e)

    def _invalidate(self) -> None:
        try:
            self._cache.delete(SNAPSHOT_KEY)
        except Exception as e:
            logger.warning("Snapshot invalidation failed: %s", e)
