"""Notion API dependencies."""

import logging

from fastapi import Depends, HTTPException, status

from src.api.dependencies import get_config_store
from src.guild_config.base import GuildConfigStore
from src.notion.client import NotionClient
from src.notion.enums import ErrorCode
from src.notion.exceptions import GuildNotConfiguredError, NotionClientError, describe_error

logger = logging.getLogger(__name__)

_STATUS_BY_CODE = {
    ErrorCode.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ErrorCode.NOT_CONFIGURED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_KEY: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.ACCESS_DENIED: status.HTTP_403_FORBIDDEN,
    ErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.RATE_LIMITED: status.HTTP_429_TOO_MANY_REQUESTS,
}


def notion_error_to_http(error: NotionClientError) -> HTTPException:
    """Map a Notion client error to an HTTP error response.

    Codes without a mapping become 502 Bad Gateway.

    :param error: The client error.
    :returns: HTTPException to raise from the endpoint.
    """
    status_code = _STATUS_BY_CODE.get(error.code, status.HTTP_502_BAD_GATEWAY)
    return HTTPException(status_code=status_code, detail=describe_error(error))


def get_guild_notion_client(
    guild_id: str,
    store: GuildConfigStore = Depends(get_config_store),
) -> NotionClient:
    """Create a NotionClient from a guild's stored settings.

    :param guild_id: Discord guild ID from the query string.
    :param store: Guild config store.
    :returns: A client for the guild's task database.
    :raises HTTPException: 400 if the guild has not completed setup.
    """
    config = store.get(guild_id)
    if config is None or not config.is_complete:
        logger.warning(f"Notion request for unconfigured guild: guild_id={guild_id}")
        raise notion_error_to_http(GuildNotConfiguredError(guild_id))
    return NotionClient(config.notion_api_key or "", config.notion_database_id or "")
