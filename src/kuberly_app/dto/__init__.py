"""Data Transfer Objects for API contracts.

These Pydantic models define the external API contract.
They are used for request/response validation and serialization.

Internal domain logic should use entities from the entities package.
"""

from .requests import CreateRecordRequest, SetCacheRequest
from .responses import (
    CacheValueResponse,
    HealthCheckResponse,
    RecordItem,
    StatusResponse,
)

__all__ = [
    "CreateRecordRequest",
    "SetCacheRequest",
    "RecordItem",
    "StatusResponse",
    "CacheValueResponse",
    "HealthCheckResponse",
]
