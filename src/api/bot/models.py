"""Pydantic models for the bot configuration endpoints."""

from pydantic import BaseModel, Field


class GuildConfigRequest(BaseModel):
    """Request model for saving a guild's Notion connection."""

    notion_api_key: str = Field(..., min_length=1, description="Notion integration token")
    notion_database_id: str = Field(..., min_length=1, description="Notion task database ID")
    discord_user_id: str | None = Field(None, description="User who ran setup")


class ConfigCheckResponse(BaseModel):
    """Response model for the configuration completeness check."""

    guild_id: str = Field(..., description="Discord guild ID")
    is_complete: bool = Field(..., description="Whether both Notion settings are present")
