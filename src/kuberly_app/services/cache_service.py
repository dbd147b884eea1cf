"""Passthrough service exposing the cache to clients."""

from kuberly_app.protocols import CacheStore

DEFAULT_TTL = 300  # 5 minutes


class CacheService:
    """Direct get/set proxy to the cache store.

    Errors from the store propagate; the handler turns them into HTTP
    responses.
    """

    def __init__(self, cache: CacheStore, default_ttl: int = DEFAULT_TTL) -> None:
        """Initialize the cache service.

        Args:
            cache: Cache storage backend (required).
            default_ttl: Expiry used when a client passes a ttl of 0.
        """
        self._cache = cache
        self._default_ttl = default_ttl

    def get(self, key: str) -> str | None:
        """Look up a value; None when the key does not exist."""
        return self._cache.get(key)

    def set(self, key: str, value: str, ttl: int = 0) -> int:
        """Store a value.

        Args:
            key: The cache key
            value: The value to store
            ttl: Time-to-live in seconds; 0 selects the default

        Returns:
            The ttl actually applied
        """
        ttl = ttl or self._default_ttl
        self._cache.set(key, value, ttl)
        return ttl
