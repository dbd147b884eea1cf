"""Health aggregation over the store and the cache."""

from datetime import datetime, timezone

from kuberly_app.entities import HEALTHY, UNHEALTHY, HealthReport
from kuberly_app.protocols import CacheStore, RecordStore


class HealthService:
    """Pings each dependency independently and combines the results.

    The top-level status is healthy only when both dependencies are.
    """

    def __init__(self, store: RecordStore, cache: CacheStore, version: str) -> None:
        self._store = store
        self._cache = cache
        self._version = version

    def check(self) -> HealthReport:
        """Run both checks.

        Returns:
            HealthReport with per-dependency and overall status
        """
        database_ok = self._store.health_check()
        cache_ok = self._cache.health_check()

        return HealthReport(
            status=HEALTHY if database_ok and cache_ok else UNHEALTHY,
            timestamp=datetime.now(timezone.utc),
            version=self._version,
            database=HEALTHY if database_ok else UNHEALTHY,
            cache=HEALTHY if cache_ok else UNHEALTHY,
        )
