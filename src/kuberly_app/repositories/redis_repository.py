"""Redis implementation of CacheStore.

Plain key/value usage of Redis: string values with expiry, plus the hash
and list commands exercised by the self-test harness.
"""

import redis

from kuberly_app.config import Settings, get_redis_client


class RedisCacheRepository:
    """Redis-backed cache.

    This class satisfies the CacheStore protocol through structural
    typing - no explicit inheritance needed. The wrapped ``redis.Redis``
    client owns a thread-safe connection pool, so one instance is shared
    by every request of the process.
    """

    def __init__(self, redis_client: redis.Redis | None = None) -> None:
        """Initialize the Redis cache repository.

        Args:
            redis_client: Redis client instance. If None, creates default.
        """
        self._client = redis_client or get_redis_client()

    @classmethod
    def create(cls, settings: Settings | None = None) -> "RedisCacheRepository":
        """Factory method to create RedisCacheRepository from settings.

        Args:
            settings: Connection settings. If None, uses the cached settings.

        Returns:
            Configured RedisCacheRepository
        """
        return cls(redis_client=get_redis_client(settings))

    def ping(self) -> None:
        """Ping Redis, raising on failure."""
        self._client.ping()

    def get(self, key: str) -> str | None:
        return self._client.get(key)  # type: ignore[return-value]

    def set(self, key: str, value: str, ttl: int) -> None:
        self._client.set(key, value, ex=ttl)

    def delete(self, key: str) -> bool:
        result: int = self._client.delete(key)  # type: ignore[assignment]
        return result > 0

    def hset(self, key: str, mapping: dict[str, str]) -> int:
        return self._client.hset(key, mapping=mapping)  # type: ignore[return-value]

    def hget(self, key: str, field: str) -> str | None:
        return self._client.hget(key, field)  # type: ignore[return-value]

    def lpush(self, key: str, *values: str) -> int:
        return self._client.lpush(key, *values)  # type: ignore[return-value]

    def llen(self, key: str) -> int:
        return self._client.llen(key)  # type: ignore[return-value]

    def health_check(self) -> bool:
        """Check if Redis is accessible.

        Returns:
            True if healthy, False otherwise
        """
        try:
            return bool(self._client.ping())
        except redis.RedisError:
            return False

    def close(self) -> None:
        self._client.close()

    @property
    def client(self) -> redis.Redis:
        """Get the Redis client."""
        return self._client
