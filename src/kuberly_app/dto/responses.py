"""Response DTOs for API endpoints."""

from datetime import datetime

from pydantic import BaseModel, Field

from kuberly_app.entities import RecordEntity


class RecordItem(BaseModel):
    """Single record as returned by the listing endpoints."""

    id: int = Field(..., description="Generated record id")
    name: str = Field(..., description="Record name")
    data: str | None = Field(None, description="Record payload")
    created_at: datetime | None = Field(None, description="Creation timestamp")

    @classmethod
    def from_entity(cls, entity: RecordEntity) -> "RecordItem":
        return cls(
            id=entity.id,
            name=entity.name,
            data=entity.data,
            created_at=entity.created_at,
        )


class StatusResponse(BaseModel):
    """Acknowledgment for write operations."""

    status: str = Field(..., description="'created' or 'cached'")


class CacheValueResponse(BaseModel):
    """Response DTO for a cache passthrough lookup."""

    key: str = Field(..., description="The requested key")
    value: str = Field(..., description="The stored value")


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="'healthy' only if every dependency is healthy")
    timestamp: datetime = Field(..., description="Time of the check (UTC)")
    version: str = Field(..., description="Application version")
    database: str = Field(..., description="PostgreSQL status: 'healthy' or 'unhealthy'")
    cache: str = Field(..., description="Redis status: 'healthy' or 'unhealthy'")
