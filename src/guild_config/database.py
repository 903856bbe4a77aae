"""Guild configuration store backed by the guilds table."""

import logging
from collections.abc import Callable
from contextlib import AbstractContextManager

from sqlalchemy.orm import Session

from src.database.connection import get_session
from src.database.guilds import Guild, get_guild, reset_notion_config, set_notion_config
from src.guild_config.base import GuildConfigStore
from src.guild_config.models import GuildConfig
from src.guild_config.secrets import PassthroughSecretProvider, SecretProvider

logger = logging.getLogger(__name__)


class DatabaseGuildConfigStore(GuildConfigStore):
    """Reads and writes guild settings through SQLAlchemy.

    The API key passes through the secret provider on every read and write.
    """

    def __init__(
        self,
        secret_provider: SecretProvider | None = None,
        session_factory: Callable[[], AbstractContextManager[Session]] = get_session,
    ) -> None:
        """Initialise the store.

        :param secret_provider: Provider for the stored API key. Defaults to passthrough.
        :param session_factory: Context manager factory yielding a session.
        """
        self._secrets = secret_provider or PassthroughSecretProvider()
        self._session_factory = session_factory

    def _to_config(self, guild: Guild) -> GuildConfig:
        api_key = guild.notion_api_key
        return GuildConfig(
            guild_id=guild.guild_id,
            guild_name=guild.guild_name,
            bot_client_id=guild.bot_client_id,
            discord_user_id=guild.discord_user_id,
            notion_api_key=self._secrets.decrypt(api_key) if api_key else None,
            notion_database_id=guild.notion_database_id,
            created_at=guild.created_at,
            updated_at=guild.updated_at,
        )

    def get(self, guild_id: str) -> GuildConfig | None:
        """Load the configuration for a guild."""
        with self._session_factory() as session:
            guild = get_guild(session, guild_id)
            return self._to_config(guild) if guild is not None else None

    def save(
        self,
        guild_id: str,
        notion_api_key: str,
        notion_database_id: str,
        *,
        discord_user_id: str | None = None,
    ) -> GuildConfig:
        """Store the Notion connection for a guild."""
        with self._session_factory() as session:
            guild = set_notion_config(
                session,
                guild_id,
                self._secrets.encrypt(notion_api_key),
                notion_database_id,
                discord_user_id=discord_user_id,
            )
            return self._to_config(guild)

    def delete(self, guild_id: str) -> bool:
        """Clear the Notion connection for a guild."""
        with self._session_factory() as session:
            return reset_notion_config(session, guild_id)
