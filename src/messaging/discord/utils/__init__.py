"""Utilities for the Discord bot."""

from src.messaging.discord.utils.config import DiscordConfig, get_discord_settings
from src.messaging.discord.utils.formatting import (
    DISCORD_MAX_MESSAGE_LENGTH,
    truncate_message,
    with_header,
)

__all__ = [
    "DISCORD_MAX_MESSAGE_LENGTH",
    "DiscordConfig",
    "get_discord_settings",
    "truncate_message",
    "with_header",
]
