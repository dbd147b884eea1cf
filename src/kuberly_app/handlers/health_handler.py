"""HTTP handlers for service information and health."""

from kuberly_app.dto import HealthCheckResponse
from kuberly_app.services import HealthService

ROOT_TEXT = (
    "Hello from KubeRLy Test App!\n"
    "Available endpoints:\n"
    "- /health - Health check with DB status\n"
    "- /api/test - Test data from database\n"
    "- /api/data - CRUD operations on test data\n"
    "- /api/cache - Redis cache operations\n"
)


class HealthHandler:
    """HTTP handlers for ``/`` and ``/health``."""

    def __init__(self, health_service: HealthService) -> None:
        self._health = health_service

    def root(self) -> str:
        """Handle GET / requests."""
        return ROOT_TEXT

    def health_check(self) -> HealthCheckResponse:
        """Handle GET /health requests.

        Always answers 200; the body carries the per-dependency status.
        """
        report = self._health.check()

        return HealthCheckResponse(
            status=report.status,
            timestamp=report.timestamp,
            version=report.version,
            database=report.database,
            cache=report.cache,
        )
