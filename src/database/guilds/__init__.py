"""Database model and operations for Discord guild settings."""

from src.database.guilds.models import DEFAULT_GUILD_NAME, Guild
from src.database.guilds.operations import (
    count_configured_guilds,
    get_guild,
    list_guilds,
    reset_notion_config,
    set_notion_config,
    upsert_guild,
)

__all__ = [
    # Models
    "DEFAULT_GUILD_NAME",
    "Guild",
    # Operations
    "count_configured_guilds",
    "get_guild",
    "list_guilds",
    "reset_notion_config",
    "set_notion_config",
    "upsert_guild",
]
