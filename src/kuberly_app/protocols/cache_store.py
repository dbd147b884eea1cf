"""Cache storage protocol.

Defines the interface for the key/value cache backing both the record
snapshot and the passthrough endpoint.

Implementations can include:
- Redis (default)
- An in-memory dictionary (tests)
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class CacheStore(Protocol):
    """Protocol for key/value cache backends.

    Any type that implements these methods satisfies the protocol,
    no explicit inheritance needed.

    Missing keys are reported as ``None``; connection failures raise.
    """

    def get(self, key: str) -> str | None:
        """Get the value stored under a key.

        Args:
            key: The cache key

        Returns:
            The stored value, or None if the key does not exist
        """
        ...

    def set(self, key: str, value: str, ttl: int) -> None:
        """Store a value with an expiry.

        Args:
            key: The cache key
            value: The value to store
            ttl: Time-to-live in seconds
        """
        ...

    def delete(self, key: str) -> bool:
        """Delete a key.

        Args:
            key: The cache key

        Returns:
            True if the key existed, False otherwise
        """
        ...

    def hset(self, key: str, mapping: dict[str, str]) -> int:
        """Set fields of a hash, returning the number of new fields."""
        ...

    def hget(self, key: str, field: str) -> str | None:
        """Get a single field of a hash."""
        ...

    def lpush(self, key: str, *values: str) -> int:
        """Prepend values to a list, returning the new length."""
        ...

    def llen(self, key: str) -> int:
        """Length of a list (0 when the key does not exist)."""
        ...

    def health_check(self) -> bool:
        """Check if the cache is reachable.

        Returns:
            True if healthy, False otherwise
        """
        ...
