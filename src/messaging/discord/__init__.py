"""Discord slash command bot for Notion tasks."""

from src.messaging.discord.dispatcher import (
    CommandDispatcher,
    CommandInvocation,
    CommandReply,
)

__all__ = [
    "CommandDispatcher",
    "CommandInvocation",
    "CommandReply",
]
