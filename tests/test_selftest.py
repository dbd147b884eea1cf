"""
Tests for the self-test harness, run against the in-memory stores and the
app through TestClient.
"""

from kuberly_app.selftest import TEST_KEYS, CheckResult, SelfTest, SelfTestReport
from kuberly_app.services import SNAPSHOT_KEY


def make_harness(store, cache, http_client=None, **kwargs):
    kwargs.setdefault("ping_wait", 0)
    return SelfTest(store=store, cache=cache, http_client=http_client, **kwargs)


def test_full_run_passes(store, cache, client):
    report = make_harness(store, cache, http_client=client).run()
    assert report.passed, report.summary()
    names = [result.name for result in report.results]
    assert names == [
        "cleanup",
        "postgresql",
        "cleanup",
        "redis",
        "app health",
        "app root",
        "app data",
        "app cache",
    ]


def test_run_without_app_skips_http_checks(store, cache):
    report = make_harness(store, cache).run()
    assert report.passed
    assert all(not result.name.startswith("app") for result in report.results)


def test_cleanup_removes_rows_and_known_keys(store, cache):
    store.insert("stale", "row")
    for key in TEST_KEYS:
        cache.set(key, "x", 60)
    cache.set("unrelated", "keep", 60)

    message = make_harness(store, cache).cleanup()

    assert store.records == []
    assert SNAPSHOT_KEY not in cache.values
    assert cache.values == {"unrelated": "keep"}
    assert message == f"cleared 1 rows and {len(TEST_KEYS)} keys"


def test_unreachable_store_fails_after_retries(store, cache):
    store.healthy = False
    calls = []
    original = store.health_check

    def counting_health_check():
        calls.append(1)
        return original()

    store.health_check = counting_health_check

    report = make_harness(store, cache, ping_attempts=5).run()
    result = report.results[0]
    assert result.passed is False
    assert "after 5 attempts" in result.message
    assert len(calls) == 5
    assert [(r.name, r.passed) for r in report.results[1:]] == [
        ("postgresql", False),
        ("cleanup", False),
        ("redis", False),
    ]
    assert all(r.message.startswith("skipped:") for r in report.results[1:])
    assert not report.passed


def test_health_check_failure_reported(store, cache, client):
    cache.healthy = False
    harness = make_harness(store, cache, http_client=client)
    result = harness._run_check("app health", harness.check_health)
    assert result.passed is False
    assert "unhealthy" in result.message


def test_version_mismatch_reported(store, cache, client):
    harness = make_harness(store, cache, http_client=client, expected_version="9.9.9")
    result = harness._run_check("app health", harness.check_health)
    assert result.passed is False
    assert "version" in result.message


def test_report_summary():
    report = SelfTestReport(
        results=[
            CheckResult(name="postgresql", passed=True, message="found 3 records"),
            CheckResult(name="redis", passed=False, message="boom"),
        ]
    )
    assert report.passed is False
    summary = report.summary()
    assert "[PASS] postgresql - found 3 records" in summary
    assert "[FAIL] redis - boom" in summary
    assert summary.endswith("1/2 checks passed")
