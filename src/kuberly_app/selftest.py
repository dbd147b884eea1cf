"""Self-test harness for a running deployment.

Exercises PostgreSQL and Redis directly and, optionally, the HTTP API of a
running app instance. Each check produces a CheckResult; the harness never
raises for a failed check, it reports it.

Usage:
    ```python
    harness = SelfTest.create(get_settings())
    report = harness.run()
    print(report.summary())
    ```
"""

from dataclasses import dataclass, field

import httpx
from tenacity import Retrying, stop_after_attempt, wait_fixed

from kuberly_app.config import Settings
from kuberly_app.handlers import CACHE_HEADER
from kuberly_app.protocols import CacheStore, RecordStore
from kuberly_app.repositories import PostgresRecordRepository, RedisCacheRepository
from kuberly_app.services import SNAPSHOT_KEY
from kuberly_app.utils.logging import get_logger

logger = get_logger(__name__)

PING_ATTEMPTS = 5
PING_WAIT_SECONDS = 1.0

TEST_RECORDS = [("test1", "data1"), ("test2", "data2"), ("test3", "data3")]
TEST_VALUES = {"key1": "value1", "key2": "value2", "key3": "value3"}
TEST_KEYS = ["key1", "key2", "key3", "test_list", "test_hash", SNAPSHOT_KEY, "test_key"]


class SelfTestFailure(Exception):
    """A harness expectation did not hold."""


def expect(condition: bool, message: str) -> None:
    if not condition:
        raise SelfTestFailure(message)


@dataclass
class CheckResult:
    """Outcome of one harness step."""

    name: str
    passed: bool
    message: str = ""


@dataclass
class SelfTestReport:
    """Aggregated harness outcome."""

    results: list[CheckResult] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return all(result.passed for result in self.results)

    def summary(self) -> str:
        lines = []
        for result in self.results:
            mark = "PASS" if result.passed else "FAIL"
            line = f"[{mark}] {result.name}"
            if result.message:
                line += f" - {result.message}"
            lines.append(line)
        failed = sum(1 for result in self.results if not result.passed)
        lines.append(f"{len(self.results) - failed}/{len(self.results)} checks passed")
        return "\n".join(lines)


class SelfTest:
    """Integration checks against live dependencies.

    Args:
        store: Record store to exercise
        cache: Cache store to exercise
        http_client: Client whose base_url points at the app; None skips
            the HTTP checks
        expected_version: Version the health endpoint must report
        ping_attempts: Pings per dependency before giving up
        ping_wait: Seconds between pings
    """

    def __init__(
        self,
        store: RecordStore,
        cache: CacheStore,
        http_client: httpx.Client | None = None,
        expected_version: str = "1.0.0",
        ping_attempts: int = PING_ATTEMPTS,
        ping_wait: float = PING_WAIT_SECONDS,
    ) -> None:
        self._store = store
        self._cache = cache
        self._http = http_client
        self._expected_version = expected_version
        self._ping_attempts = ping_attempts
        self._ping_wait = ping_wait

    @classmethod
    def create(cls, settings: Settings, include_app: bool = True) -> "SelfTest":
        """Build a harness wired to the configured PostgreSQL, Redis and app."""
        store = PostgresRecordRepository.create(settings)
        store.open(wait=False)
        http_client = None
        if include_app:
            http_client = httpx.Client(base_url=settings.app_base_url, timeout=10.0)
        return cls(
            store=store,
            cache=RedisCacheRepository.create(settings),
            http_client=http_client,
            expected_version=settings.app_version,
        )

    def run(self) -> SelfTestReport:
        """Run every check in order and collect the results."""
        report = SelfTestReport()
        first_cleanup = self._run_check("cleanup", self.cleanup)
        report.results.append(first_cleanup)
        if first_cleanup.passed:
            report.results.append(self._run_check("postgresql", self.check_store))
            report.results.append(self._run_check("cleanup", self.cleanup))
            report.results.append(self._run_check("redis", self.check_cache))
        else:
            # Dependencies were already waited on; don't retry them again.
            for name in ("postgresql", "cleanup", "redis"):
                skipped = CheckResult(
                    name=name, passed=False, message=f"skipped: {first_cleanup.message}"
                )
                report.results.append(skipped)
        if self._http is not None:
            report.results.append(self._run_check("app health", self.check_health))
            report.results.append(self._run_check("app root", self.check_root))
            report.results.append(self._run_check("app data", self.check_data))
            report.results.append(self._run_check("app cache", self.check_cache_api))
        return report

    def _run_check(self, name: str, check) -> CheckResult:
        logger.info("Running check: %s", name)
        try:
            message = check()
        except Exception as e:
            logger.error("Check %s failed: %s", name, e)
            return CheckResult(name=name, passed=False, message=str(e))
        return CheckResult(name=name, passed=True, message=message or "")

    def _wait_for(self, label: str, healthy) -> None:
        retrying = Retrying(
            stop=stop_after_attempt(self._ping_attempts),
            wait=wait_fixed(self._ping_wait),
            reraise=True,
        )
        for attempt in retrying:
            with attempt:
                if not healthy():
                    n = attempt.retry_state.attempt_number
                    logger.warning("%s ping attempt %d failed", label, n)
                    raise SelfTestFailure(
                        f"could not ping {label} after {self._ping_attempts} attempts"
                    )

    def cleanup(self) -> str:
        """Remove rows and keys left behind by previous runs."""
        self._wait_for("PostgreSQL", self._store.health_check)
        self._store.ensure_schema()
        rows = self._store.delete_all()

        self._wait_for("Redis", self._cache.health_check)
        keys = sum(1 for key in TEST_KEYS if self._cache.delete(key))

        return f"cleared {rows} rows and {keys} keys"

    def check_store(self) -> str:
        self._store.ensure_schema()
        for name, data in TEST_RECORDS:
            self._store.insert(name, data)

        records = self._store.list_all()
        expect(len(records) == len(TEST_RECORDS), f"expected 3 records, found {len(records)}")
        expect(
            (records[0].name, records[0].data) == TEST_RECORDS[0],
            f"unexpected first record {records[0].name!r}/{records[0].data!r}",
        )
        return f"found {len(records)} records"

    def check_cache(self) -> str:
        for key, value in TEST_VALUES.items():
            self._cache.set(key, value, 60)
        for key, value in TEST_VALUES.items():
            got = self._cache.get(key)
            expect(got == value, f"{key}: expected {value!r}, got {got!r}")

        self._cache.lpush("test_list", "item1", "item2", "item3")
        length = self._cache.llen("test_list")
        expect(length == 3, f"expected list length 3, got {length}")

        self._cache.hset("test_hash", {"field1": "value1", "field2": "value2"})
        field_value = self._cache.hget("test_hash", "field1")
        expect(field_value == "value1", f"expected hash field 'value1', got {field_value!r}")
        return "string, list and hash operations ok"

    def check_health(self) -> str:
        response = self._http.get("/health")
        expect(response.status_code == 200, f"health returned {response.status_code}")
        body = response.json()
        for field_name in ("status", "database", "cache"):
            expect(body.get(field_name) == "healthy", f"{field_name} is {body.get(field_name)!r}")
        expect(
            body.get("version") == self._expected_version,
            f"version is {body.get('version')!r}",
        )
        return f"database: {body['database']}, cache: {body['cache']}"

    def check_root(self) -> str:
        response = self._http.get("/")
        expect(response.status_code == 200, f"root returned {response.status_code}")
        expect("KubeRLy Test App" in response.text, "root text missing app name")
        return ""

    def check_data(self) -> str:
        response = self._http.post(
            "/api/data", json={"name": "integration_test", "data": "test_data"}
        )
        expect(response.status_code == 201, f"insert returned {response.status_code}")

        first = self._http.get("/api/data")
        expect(first.status_code == 200, f"first read returned {first.status_code}")
        expect(first.headers.get(CACHE_HEADER) == "MISS", "first read after insert was not a MISS")

        second = self._http.get("/api/data")
        expect(second.status_code == 200, f"second read returned {second.status_code}")
        expect(second.headers.get(CACHE_HEADER) == "HIT", "second read was not a HIT")
        expect(second.content == first.content, "HIT body differs from MISS body")
        return "MISS then HIT"

    def check_cache_api(self) -> str:
        response = self._http.post(
            "/api/cache", json={"key": "test_key", "value": "test_value", "ttl": 60}
        )
        expect(response.status_code == 201, f"cache set returned {response.status_code}")

        response = self._http.get("/api/cache", params={"key": "test_key"})
        expect(response.status_code == 200, f"cache get returned {response.status_code}")
        body = response.json()
        expect(
            body == {"key": "test_key", "value": "test_value"},
            f"unexpected cache body {body!r}",
        )
        return ""

    def close(self) -> None:
        for resource in (self._store, self._cache, self._http):
            close = getattr(resource, "close", None)
            if close is not None:
                close()
