"""Pydantic models for Notion API endpoints."""

from pydantic import BaseModel, Field

from src.notion.models import NotionDatabase


class ConnectionTestRequest(BaseModel):
    """Request model for testing a Notion connection before saving it."""

    api_key: str = Field(..., min_length=1, description="Notion integration token")
    database_id: str = Field(..., min_length=1, description="Notion task database ID")


class ConnectionTestResponse(BaseModel):
    """Response model for a successful connection test."""

    success: bool = Field(True, description="Whether the database could be read")
    database: NotionDatabase = Field(..., description="Summary of the database")
