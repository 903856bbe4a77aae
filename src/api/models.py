"""Pydantic models for API responses."""

from typing import Any

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Standard error response model."""

    detail: str = Field(..., description="Error description")


# OpenAPI documentation for routes that call Notion
NOTION_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse, "description": "Invalid input or guild not set up"},
    401: {"model": ErrorResponse, "description": "Notion rejected the API key"},
    403: {"model": ErrorResponse, "description": "Integration has no access to the database"},
    404: {"model": ErrorResponse, "description": "Database or task not found"},
    429: {"model": ErrorResponse, "description": "Notion rate limit exceeded"},
    502: {"model": ErrorResponse, "description": "Notion request failed"},
}
