"""Pydantic models for per-guild configuration."""

from datetime import datetime

from pydantic import BaseModel, Field


class GuildConfig(BaseModel):
    """Notion connection settings for one Discord guild.

    The API key is held decrypted; stores apply their secret provider on
    the way in and out.
    """

    guild_id: str = Field(..., min_length=1, description="Discord guild ID")
    guild_name: str | None = Field(None, description="Guild display name")
    bot_client_id: str | None = Field(None, description="Discord application ID")
    discord_user_id: str | None = Field(None, description="User who configured the guild")
    notion_api_key: str | None = Field(None, description="Notion integration token")
    notion_database_id: str | None = Field(None, description="Notion task database ID")
    created_at: datetime | None = Field(None, description="When the guild was first seen")
    updated_at: datetime | None = Field(None, description="When the settings last changed")

    @property
    def is_complete(self) -> bool:
        """Both Notion settings are present and non-empty."""
        return bool(self.notion_api_key and self.notion_database_id)

    @property
    def masked_api_key(self) -> str | None:
        """The API key reduced to a short prefix, for display and logs."""
        if not self.notion_api_key:
            return None
        return f"{self.notion_api_key[:7]}..."
