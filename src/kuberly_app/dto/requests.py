"""Request DTOs for API endpoints."""

from pydantic import BaseModel, Field


class CreateRecordRequest(BaseModel):
    """Request DTO for inserting a record."""

    name: str = Field(..., description="Record name (required)", max_length=255)
    data: str | None = Field(None, description="Optional free-form payload")


class SetCacheRequest(BaseModel):
    """Request DTO for storing a value through the cache passthrough."""

    key: str = Field(..., description="Cache key", min_length=1)
    value: str = Field(..., description="Value to store")
    ttl: int = Field(
        0,
        description="Time-to-live in seconds (0 uses the default of 300)",
        ge=0,
    )
