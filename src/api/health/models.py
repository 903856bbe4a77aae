"""Pydantic models for health check endpoints."""

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, Field


class CheckStatus(StrEnum):
    """Result of a single dependency check."""

    HEALTHY = "healthy"
    CONFIGURED = "configured"
    NOT_CONFIGURED = "not_configured"
    ERROR = "error"
    UNKNOWN = "unknown"


class HealthChecks(BaseModel):
    """Per-dependency check results."""

    database: CheckStatus = Field(..., description="Database connectivity")
    discord: CheckStatus = Field(..., description="Discord bot token presence")
    notion: CheckStatus = Field(..., description="Whether any guild has connected Notion")
    llm: CheckStatus = Field(..., description="Bedrock credentials presence")


class HealthResponse(BaseModel):
    """Response model for health check endpoint."""

    status: str = Field(..., description="Service health status")
    version: str = Field(..., description="Application version")
    timestamp: datetime = Field(..., description="When the check ran")
    environment: str = Field(..., description="Deployment environment")
    checks: HealthChecks = Field(..., description="Dependency checks")
