"""In-memory guild configuration store for local development and tests."""

import logging
from datetime import UTC, datetime

from src.guild_config.base import GuildConfigStore
from src.guild_config.models import GuildConfig

logger = logging.getLogger(__name__)


class InMemoryGuildConfigStore(GuildConfigStore):
    """Keeps configurations in a dict. Nothing survives a restart."""

    def __init__(self) -> None:
        """Initialise an empty store."""
        self._configs: dict[str, GuildConfig] = {}

    def get(self, guild_id: str) -> GuildConfig | None:
        """Load the configuration for a guild."""
        config = self._configs.get(guild_id)
        return config.model_copy() if config is not None else None

    def save(
        self,
        guild_id: str,
        notion_api_key: str,
        notion_database_id: str,
        *,
        discord_user_id: str | None = None,
    ) -> GuildConfig:
        """Store the Notion connection for a guild."""
        now = datetime.now(UTC)
        existing = self._configs.get(guild_id)

        config = GuildConfig(
            guild_id=guild_id,
            guild_name=existing.guild_name if existing else None,
            bot_client_id=existing.bot_client_id if existing else None,
            discord_user_id=discord_user_id or (existing.discord_user_id if existing else None),
            notion_api_key=notion_api_key,
            notion_database_id=notion_database_id,
            created_at=existing.created_at if existing else now,
            updated_at=now,
        )
        self._configs[guild_id] = config
        logger.info(f"Saved guild config in memory: guild_id={guild_id}")
        return config.model_copy()

    def delete(self, guild_id: str) -> bool:
        """Clear the Notion connection for a guild."""
        existing = self._configs.get(guild_id)
        if existing is None:
            return False

        self._configs[guild_id] = existing.model_copy(
            update={
                "notion_api_key": None,
                "notion_database_id": None,
                "updated_at": datetime.now(UTC),
            }
        )
        logger.info(f"Reset guild config in memory: guild_id={guild_id}")
        return True
