"""
Integration tests against real PostgreSQL and Redis.

Connection details come from the same environment variables the app uses,
defaulting to localhost. Tests are skipped when either service is
unreachable.
"""

import os

import pytest
from fastapi.testclient import TestClient

from kuberly_app.api.app import create_app
from kuberly_app.config import Settings
from kuberly_app.repositories import PostgresRecordRepository, RedisCacheRepository
from kuberly_app.selftest import SelfTest
from kuberly_app.services import SNAPSHOT_KEY

pytestmark = pytest.mark.integration


@pytest.fixture(scope="module")
def live_settings() -> Settings:
    return Settings(
        postgres_host=os.getenv("POSTGRES_HOST", "localhost"),
        redis_host=os.getenv("REDIS_HOST", "localhost"),
        postgres_connect_timeout=2,
        redis_timeout=2.0,
    )


@pytest.fixture(scope="module")
def live_store(live_settings):
    store = PostgresRecordRepository.create(live_settings)
    try:
        store.open()
    except Exception:
        store.close()
        pytest.skip("PostgreSQL not available for integration tests")
    store.ensure_schema()
    yield store
    store.close()


@pytest.fixture(scope="module")
def live_cache(live_settings):
    cache = RedisCacheRepository.create(live_settings)
    if not cache.health_check():
        cache.close()
        pytest.skip("Redis not available for integration tests")
    yield cache
    cache.close()


@pytest.fixture
def live_client(live_settings, live_store, live_cache):
    live_store.delete_all()
    live_cache.delete(SNAPSHOT_KEY)
    app = create_app(settings=live_settings, store=live_store, cache=live_cache)
    with TestClient(app) as client:
        yield client
    live_store.delete_all()
    live_cache.delete(SNAPSHOT_KEY)


def test_insert_three_then_list_in_id_order(live_client, live_cache):
    for i in (1, 2, 3):
        response = live_client.post("/api/data", json={"name": f"test{i}", "data": f"data{i}"})
        assert response.status_code == 201
    live_cache.delete(SNAPSHOT_KEY)

    response = live_client.get("/api/data")
    assert response.headers["X-Cache"] == "MISS"
    records = response.json()
    assert [(r["name"], r["data"]) for r in records] == [
        ("test1", "data1"),
        ("test2", "data2"),
        ("test3", "data3"),
    ]
    assert records[0]["id"] < records[1]["id"] < records[2]["id"]


def test_miss_then_hit(live_client, live_cache):
    live_client.post("/api/data", json={"name": "integration_test", "data": "test_data"})

    first = live_client.get("/api/data")
    second = live_client.get("/api/data")
    assert (first.headers["X-Cache"], second.headers["X-Cache"]) == ("MISS", "HIT")
    assert second.content == first.content
    assert 0 < live_cache.client.ttl(SNAPSHOT_KEY) <= 300


def test_cache_passthrough(live_client, live_cache):
    response = live_client.post("/api/cache", json={"key": "test_key", "value": "test_value"})
    assert response.status_code == 201
    assert 290 < live_cache.client.ttl("test_key") <= 300

    response = live_client.get("/api/cache", params={"key": "test_key"})
    assert response.json() == {"key": "test_key", "value": "test_value"}
    live_cache.delete("test_key")

    assert live_client.get("/api/cache", params={"key": "test_key"}).status_code == 404


def test_health_with_live_dependencies(live_client):
    body = live_client.get("/health").json()
    assert (body["status"], body["database"], body["cache"]) == ("healthy", "healthy", "healthy")


def test_harness_against_live_dependencies(live_store, live_cache):
    report = SelfTest(store=live_store, cache=live_cache).run()
    assert report.passed, report.summary()
