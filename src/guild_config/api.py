"""Guild configuration store that goes through the web API.

Used by the bot process so that only the API holds database credentials.
"""

import logging

from src.api.client import BotAPIClient
from src.guild_config.base import GuildConfigStore
from src.guild_config.models import GuildConfig

logger = logging.getLogger(__name__)


class APIGuildConfigStore(GuildConfigStore):
    """Reads and writes guild settings via the /bot/guilds routes."""

    def __init__(self, client: BotAPIClient | None = None) -> None:
        """Initialise the store.

        :param client: API client. Defaults to one built from environment.
        """
        self._client = client or BotAPIClient()

    def get(self, guild_id: str) -> GuildConfig | None:
        """Load the configuration for a guild.

        :raises BotAPIError: If the API fails with anything but 404.
        """
        data = self._client.get_guild_config(guild_id)
        if data is None:
            return None
        return GuildConfig.model_validate(data)

    def save(
        self,
        guild_id: str,
        notion_api_key: str,
        notion_database_id: str,
        *,
        discord_user_id: str | None = None,
    ) -> GuildConfig:
        """Store the Notion connection for a guild."""
        data = self._client.save_guild_config(
            guild_id,
            {
                "notion_api_key": notion_api_key,
                "notion_database_id": notion_database_id,
                "discord_user_id": discord_user_id,
            },
        )
        logger.info(f"Saved guild config via API: guild_id={guild_id}")
        return GuildConfig.model_validate(data)

    def delete(self, guild_id: str) -> bool:
        """Clear the Notion connection for a guild."""
        deleted = self._client.delete_guild_config(guild_id)
        if deleted:
            logger.info(f"Reset guild config via API: guild_id={guild_id}")
        return deleted

    def is_complete(self, guild_id: str) -> bool:
        """Ask the API whether a guild has both Notion settings."""
        return self._client.check_guild_config(guild_id)
