"""Result of a cache-aside listing."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RecordSnapshot:
    """Serialized record list plus where it came from.

    Attributes:
        payload: JSON array of records, exactly as sent to the client
        cache_hit: True if the payload was read from the cache
    """

    payload: str
    cache_hit: bool
