"""Per-guild Notion configuration stores."""

import os

from src.guild_config.api import APIGuildConfigStore
from src.guild_config.base import GuildConfigStore
from src.guild_config.database import DatabaseGuildConfigStore
from src.guild_config.memory import InMemoryGuildConfigStore
from src.guild_config.models import GuildConfig
from src.guild_config.secrets import PassthroughSecretProvider, SecretProvider


def create_config_store(backend: str | None = None) -> GuildConfigStore:
    """Build the configuration store selected by GUILD_CONFIG_STORE.

    :param backend: One of "api", "database" or "memory". Defaults to the
        GUILD_CONFIG_STORE environment variable, then "api".
    :returns: A configuration store.
    :raises ValueError: If the backend is unknown.
    """
    backend = (backend or os.environ.get("GUILD_CONFIG_STORE", "api")).lower()

    match backend:
        case "api":
            return APIGuildConfigStore()
        case "database":
            return DatabaseGuildConfigStore()
        case "memory":
            return InMemoryGuildConfigStore()
        case _:
            raise ValueError(f"Unknown guild config store: {backend}")


__all__ = [
    "APIGuildConfigStore",
    "DatabaseGuildConfigStore",
    "GuildConfig",
    "GuildConfigStore",
    "InMemoryGuildConfigStore",
    "PassthroughSecretProvider",
    "SecretProvider",
    "create_config_store",
]
