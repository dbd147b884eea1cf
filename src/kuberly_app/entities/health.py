"""Health report domain entity."""

from dataclasses import dataclass
from datetime import datetime

HEALTHY = "healthy"
UNHEALTHY = "unhealthy"


@dataclass(frozen=True)
class HealthReport:
    """Composite health of the service and its dependencies."""

    status: str
    timestamp: datetime
    version: str
    database: str
    cache: str
