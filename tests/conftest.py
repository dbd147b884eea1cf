"""
Shared fixtures: in-memory stand-ins for PostgreSQL and Redis and a
TestClient wired to them.
"""

from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient

from kuberly_app.api.app import create_app
from kuberly_app.config import Settings
from kuberly_app.entities import RecordEntity


class InMemoryRecordStore:
    """RecordStore keeping rows in a list."""

    def __init__(self) -> None:
        self.records: list[RecordEntity] = []
        self.healthy = True
        self.fail_writes = False
        self.fail_reads = False
        self.list_calls = 0
        self._next_id = 1

    def ensure_schema(self) -> None:
        pass

    def insert(self, name: str, data: str | None) -> int:
        if self.fail_writes:
            raise ConnectionError("database is down")
        record_id = self._next_id
        self._next_id += 1
        created_at = datetime(2024, 1, 1, 12, 0, 0) + timedelta(seconds=record_id)
        self.records.append(RecordEntity(id=record_id, name=name, data=data, created_at=created_at))
        return record_id

    def list_all(self) -> list[RecordEntity]:
        if self.fail_reads:
            raise ConnectionError("database is down")
        self.list_calls += 1
        return sorted(self.records, key=lambda r: r.id)

    def delete_all(self) -> int:
        count = len(self.records)
        self.records.clear()
        return count

    def health_check(self) -> bool:
        return self.healthy


class InMemoryCache:
    """CacheStore keeping values in dictionaries; TTLs are recorded, not enforced."""

    def __init__(self) -> None:
        self.values: dict[str, str] = {}
        self.ttls: dict[str, int] = {}
        self.hashes: dict[str, dict[str, str]] = {}
        self.lists: dict[str, list[str]] = {}
        self.healthy = True
        self.fail_reads = False
        self.fail_writes = False
        self.fail_deletes = False

    def get(self, key: str) -> str | None:
        if self.fail_reads:
            raise ConnectionError("cache is down")
        return self.values.get(key)

    def set(self, key: str, value: str, ttl: int) -> None:
        if self.fail_writes:
            raise ConnectionError("cache is down")
        self.values[key] = value
        self.ttls[key] = ttl

    def delete(self, key: str) -> bool:
        if self.fail_deletes:
            raise ConnectionError("cache is down")
        existed = False
        for table in (self.values, self.hashes, self.lists):
            if key in table:
                del table[key]
                existed = True
        self.ttls.pop(key, None)
        return existed

    def hset(self, key: str, mapping: dict[str, str]) -> int:
        current = self.hashes.setdefault(key, {})
        added = sum(1 for field in mapping if field not in current)
        current.update(mapping)
        return added

    def hget(self, key: str, field: str) -> str | None:
        return self.hashes.get(key, {}).get(field)

    def lpush(self, key: str, *values: str) -> int:
        current = self.lists.setdefault(key, [])
        for value in values:
            current.insert(0, value)
        return len(current)

    def llen(self, key: str) -> int:
        return len(self.lists.get(key, []))

    def health_check(self) -> bool:
        return self.healthy


@pytest.fixture
def settings() -> Settings:
    return Settings(
        postgres_host="localhost",
        redis_host="localhost",
        app_version="1.0.0",
        log_level="DEBUG",
    )


@pytest.fixture
def store() -> InMemoryRecordStore:
    return InMemoryRecordStore()


@pytest.fixture
def cache() -> InMemoryCache:
    return InMemoryCache()


@pytest.fixture
def client(settings, store, cache):
    """Create a test client backed by the in-memory stores."""
    app = create_app(settings=settings, store=store, cache=cache)
    with TestClient(app) as test_client:
        yield test_client
