"""Health check response schemas."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

HealthStatus = Literal["ok", "degraded"]


class HealthResponse(BaseModel):
    """Overall status plus one boolean per dependency."""

    status: HealthStatus
    version: str
    checks: dict[str, bool] = Field(default_factory=dict)
