"""Configuration for the Discord bot using pydantic-settings."""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.llm.bedrock_client import VALID_MODEL_OPTIONS
from src.paths import ENV_FILE


class DiscordConfig(BaseSettings):
    """Configuration for the Discord bot.

    All settings are loaded from environment variables with the DISCORD_ prefix.

    :param bot_token: Bot token from the Discord developer portal.
    :param sync_commands: Whether to sync the slash command tree on startup.
    :param command_guild_id: Guild to sync commands to. Syncs globally when unset.
    :param advice_model: Model alias used by the advice commands.
    """

    model_config = SettingsConfigDict(
        env_prefix="DISCORD_",
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    bot_token: str = Field(..., description="Bot token from the Discord developer portal")
    sync_commands: bool = Field(
        default=False,
        description="Sync slash commands when the bot connects",
    )
    command_guild_id: int | None = Field(
        default=None,
        description="Guild to sync commands to; global sync when unset",
    )
    advice_model: str = Field(
        default="haiku",
        description="Model alias for /advise and /weekadvise",
    )

    @field_validator("advice_model")
    @classmethod
    def validate_advice_model(cls, v: str) -> str:
        """Validate that the advice model is a known alias.

        :param v: Raw model alias from environment.
        :returns: The lower-cased alias.
        :raises ValueError: If the alias is unknown.
        """
        model = v.lower()
        if model not in VALID_MODEL_OPTIONS:
            valid_options = ", ".join(sorted(VALID_MODEL_OPTIONS))
            raise ValueError(f"Invalid advice model '{v}'. Must be one of: {valid_options}")
        return model


@lru_cache
def get_discord_settings() -> DiscordConfig:
    """Get cached Discord settings.

    Settings are loaded once and cached for the lifetime of the process.

    :returns: Configured DiscordConfig instance.
    """
    return DiscordConfig()  # type: ignore[call-arg]
