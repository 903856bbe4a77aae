"""Pydantic models for guild endpoints."""

from datetime import datetime

from pydantic import BaseModel, Field


class GuildResponse(BaseModel):
    """Response model for a guild. The Notion API key is never included."""

    guild_id: str = Field(..., description="Discord guild ID")
    guild_name: str = Field(..., description="Guild display name")
    bot_client_id: str | None = Field(None, description="Discord application ID")
    discord_user_id: str | None = Field(None, description="User who configured the guild")
    notion_database_id: str | None = Field(None, description="Notion task database ID")
    has_notion_key: bool = Field(..., description="Whether a Notion API key is stored")
    created_at: datetime = Field(..., description="When the guild was first registered")
    updated_at: datetime = Field(..., description="When the guild was last updated")


class GuildListResponse(BaseModel):
    """Response model for listing guilds."""

    results: list[GuildResponse] = Field(default_factory=list, description="Guilds")


class UpsertGuildRequest(BaseModel):
    """Request model for creating or updating a guild.

    Omitted fields keep their stored values.
    """

    guild_id: str = Field(..., min_length=1, description="Discord guild ID")
    guild_name: str | None = Field(None, max_length=100, description="Guild display name")
    bot_client_id: str | None = Field(None, description="Discord application ID")
    discord_user_id: str | None = Field(None, description="User registering the guild")
    notion_api_key: str | None = Field(None, min_length=1, description="Notion integration token")
    notion_database_id: str | None = Field(None, min_length=1, description="Notion task database ID")
