"""Base class for guild configuration stores.

The bot and the API resolve credentials through a store and hand them to
NotionClient; the client never talks to a store itself.
"""

from abc import ABC, abstractmethod

from src.guild_config.models import GuildConfig


class GuildConfigStore(ABC):
    """Abstract base class for guild configuration stores."""

    @abstractmethod
    def get(self, guild_id: str) -> GuildConfig | None:
        """Load the configuration for a guild.

        :param guild_id: Discord guild ID.
        :returns: The configuration, or None if the guild is unknown.
        """
        ...

    @abstractmethod
    def save(
        self,
        guild_id: str,
        notion_api_key: str,
        notion_database_id: str,
        *,
        discord_user_id: str | None = None,
    ) -> GuildConfig:
        """Store the Notion connection for a guild.

        :param guild_id: Discord guild ID.
        :param notion_api_key: Notion integration token.
        :param notion_database_id: Notion task database ID.
        :param discord_user_id: User who ran setup.
        :returns: The saved configuration.
        """
        ...

    @abstractmethod
    def delete(self, guild_id: str) -> bool:
        """Clear the Notion connection for a guild.

        The guild itself is kept; only the Notion settings are removed.

        :param guild_id: Discord guild ID.
        :returns: True if the guild was known.
        """
        ...

    def is_complete(self, guild_id: str) -> bool:
        """Check whether a guild has both Notion settings.

        :param guild_id: Discord guild ID.
        :returns: True if the guild can talk to Notion.
        """
        config = self.get(guild_id)
        return config is not None and config.is_complete
