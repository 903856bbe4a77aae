"""Shared dependencies for API endpoints."""

from fastapi import Depends

from src.guild_config.base import GuildConfigStore
from src.guild_config.database import DatabaseGuildConfigStore
from src.guild_config.secrets import PassthroughSecretProvider, SecretProvider


def get_secret_provider() -> SecretProvider:
    """Get the provider applied to Notion API keys before they are stored."""
    return PassthroughSecretProvider()


def get_config_store(
    secret_provider: SecretProvider = Depends(get_secret_provider),
) -> GuildConfigStore:
    """Create the database-backed guild config store."""
    return DatabaseGuildConfigStore(secret_provider)
