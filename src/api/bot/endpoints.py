"""Guild configuration endpoints used by the Discord bot.

These return the stored Notion API key, so they sit behind the same bearer
token as every other route and are meant for the bot process only.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status

from src.api.bot.models import ConfigCheckResponse, GuildConfigRequest
from src.api.dependencies import get_config_store
from src.guild_config.base import GuildConfigStore
from src.guild_config.models import GuildConfig

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/bot/guilds", tags=["Bot"])


@router.get(
    "/{guild_id}/config",
    response_model=GuildConfig,
    summary="Get guild config",
)
def get_config(
    guild_id: str,
    store: GuildConfigStore = Depends(get_config_store),
) -> GuildConfig:
    """Retrieve a guild's configuration."""
    config = store.get(guild_id)
    if config is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Guild not found: {guild_id}",
        )
    return config


@router.put(
    "/{guild_id}/config",
    response_model=GuildConfig,
    summary="Save guild config",
)
def save_config(
    guild_id: str,
    request: GuildConfigRequest,
    store: GuildConfigStore = Depends(get_config_store),
) -> GuildConfig:
    """Store a guild's Notion connection, creating the guild if needed."""
    logger.info(f"Saving guild config: guild_id={guild_id}")
    return store.save(
        guild_id,
        request.notion_api_key,
        request.notion_database_id,
        discord_user_id=request.discord_user_id,
    )


@router.delete(
    "/{guild_id}/config",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Reset guild config",
)
def delete_config(
    guild_id: str,
    store: GuildConfigStore = Depends(get_config_store),
) -> Response:
    """Clear a guild's Notion connection."""
    if not store.delete(guild_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Guild not found: {guild_id}",
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/{guild_id}/config/check",
    response_model=ConfigCheckResponse,
    summary="Check guild config",
)
def check_config(
    guild_id: str,
    store: GuildConfigStore = Depends(get_config_store),
) -> ConfigCheckResponse:
    """Report whether a guild can run task commands."""
    return ConfigCheckResponse(guild_id=guild_id, is_complete=store.is_complete(guild_id))
