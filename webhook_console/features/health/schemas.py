"""Health check response schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class HealthResponse(BaseModel):
    """Liveness response.

    Example:
        ```json
        {
            "status": "healthy",
            "service": "webhook-console",
            "version": "0.1.0",
            "timestamp": "2025-01-01T00:00:00Z"
        }
        ```
    """

    status: Literal["healthy"] = "healthy"
    service: str = Field(min_length=1, max_length=100, description="Service name")
    version: str = Field(min_length=1, max_length=50, description="Service version")
    timestamp: datetime = Field(description="Check timestamp")

    model_config = ConfigDict(str_strip_whitespace=True)


class ReadinessResponse(BaseModel):
    """Readiness response.

    The console is ready once at least one tenant is configured and every
    tenant has an upstream URL.
    """

    ready: bool = Field(description="Overall readiness status")
    checks: dict[str, bool] = Field(default_factory=dict, description="Individual checks")
    timestamp: datetime = Field(description="Check timestamp")
