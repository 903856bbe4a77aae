"""API endpoints for registering and listing Discord guilds."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from src.api.dependencies import get_secret_provider
from src.api.guilds.models import GuildListResponse, GuildResponse, UpsertGuildRequest
from src.database.connection import get_session
from src.database.guilds import Guild, get_guild, list_guilds, upsert_guild
from src.guild_config.secrets import SecretProvider

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/guilds", tags=["Guilds"])


def _guild_to_response(guild: Guild) -> GuildResponse:
    """Convert a guild model to response.

    :param guild: The database model.
    :returns: API response model without the API key.
    """
    return GuildResponse(
        guild_id=guild.guild_id,
        guild_name=guild.guild_name,
        bot_client_id=guild.bot_client_id,
        discord_user_id=guild.discord_user_id,
        notion_database_id=guild.notion_database_id,
        has_notion_key=bool(guild.notion_api_key),
        created_at=guild.created_at,
        updated_at=guild.updated_at,
    )


@router.get(
    "",
    response_model=GuildListResponse,
    summary="List guilds",
)
def get_guilds() -> GuildListResponse:
    """List registered guilds, most recently updated first."""
    with get_session() as session:
        guilds = list_guilds(session)
        return GuildListResponse(results=[_guild_to_response(g) for g in guilds])


@router.post(
    "",
    response_model=GuildResponse,
    summary="Create or update guild",
)
def upsert(
    request: UpsertGuildRequest,
    secret_provider: SecretProvider = Depends(get_secret_provider),
) -> GuildResponse:
    """Register a guild or update the fields that are provided."""
    logger.info(f"Upserting guild: guild_id={request.guild_id}")
    api_key = request.notion_api_key
    with get_session() as session:
        guild = upsert_guild(
            session,
            request.guild_id,
            guild_name=request.guild_name,
            bot_client_id=request.bot_client_id,
            discord_user_id=request.discord_user_id,
            notion_api_key=secret_provider.encrypt(api_key) if api_key else None,
            notion_database_id=request.notion_database_id,
        )
        return _guild_to_response(guild)


@router.get(
    "/{guild_id}",
    response_model=GuildResponse,
    summary="Get guild",
)
def get_single_guild(guild_id: str) -> GuildResponse:
    """Retrieve a single guild."""
    with get_session() as session:
        guild = get_guild(session, guild_id)
        if guild is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Guild not found: {guild_id}",
            )
        return _guild_to_response(guild)
