"""API response models."""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field


class ErrorResponse(BaseModel):
    """Error body returned by the API."""

    error: str = Field(..., description="Machine readable error code")
    message: str = Field(..., description="Human readable message")


class HealthResponse(BaseModel):
    """Health check response."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "status": "healthy",
                "version": "1.0.0",
                "services": {"redis": True, "database": True},
            }
        }
    )

    status: str = Field(..., description="Overall health status")
    version: str = Field(..., description="Application version")
    services: dict[str, bool] = Field(
        default_factory=dict, description="Individual service health"
    )
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
