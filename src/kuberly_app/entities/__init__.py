"""Domain entities for internal representation.

These are frozen dataclasses used by services and repositories. They are
not API contracts; the dto package defines those.
"""

from .health import HEALTHY, UNHEALTHY, HealthReport
from .record import RecordEntity
from .snapshot import RecordSnapshot

__all__ = [
    "HEALTHY",
    "UNHEALTHY",
    "HealthReport",
    "RecordEntity",
    "RecordSnapshot",
]
