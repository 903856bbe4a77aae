"""Web API for the Notion task bot."""

from src.api.client import BotAPIClient, BotAPIError

__all__ = ["BotAPIClient", "BotAPIError"]
