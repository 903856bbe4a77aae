"""Database operations for Discord guild settings."""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from sqlalchemy.orm import Session

from src.database.guilds.models import DEFAULT_GUILD_NAME, Guild

logger = logging.getLogger(__name__)


def get_guild(session: Session, guild_id: str) -> Guild | None:
    """Get a guild by its Discord ID.

    :param session: Database session.
    :param guild_id: Discord guild ID.
    :returns: The guild or None if not found.
    """
    return session.query(Guild).filter(Guild.guild_id == guild_id).first()


def list_guilds(session: Session) -> list[Guild]:
    """List all guilds, most recently updated first.

    :param session: Database session.
    :returns: List of guilds.
    """
    return session.query(Guild).order_by(Guild.updated_at.desc()).all()


def upsert_guild(
    session: Session,
    guild_id: str,
    *,
    guild_name: str | None = None,
    bot_client_id: str | None = None,
    discord_user_id: str | None = None,
    notion_api_key: str | None = None,
    notion_database_id: str | None = None,
) -> Guild:
    """Create a guild or update the values that are given.

    Values left as None keep whatever the row already holds. New rows
    without a name are stored as "Unknown Guild".

    :param session: Database session.
    :param guild_id: Discord guild ID.
    :param guild_name: Display name of the guild.
    :param bot_client_id: Discord application ID of the bot.
    :param discord_user_id: ID of the user who configured the guild.
    :param notion_api_key: Notion integration token, already passed through the secret provider.
    :param notion_database_id: Notion task database ID.
    :returns: The created or updated guild.
    """
    updates = {
        "guild_name": guild_name,
        "bot_client_id": bot_client_id,
        "discord_user_id": discord_user_id,
        "notion_api_key": notion_api_key,
        "notion_database_id": notion_database_id,
    }

    guild = get_guild(session, guild_id)
    if guild is None:
        guild = Guild(guild_id=guild_id, guild_name=guild_name or DEFAULT_GUILD_NAME)
        session.add(guild)
        created = True
    else:
        created = False

    for attribute, value in updates.items():
        if value is not None:
            setattr(guild, attribute, value)

    guild.updated_at = datetime.now(UTC)
    session.flush()
    logger.info(f"{'Created' if created else 'Updated'} guild: guild_id={guild_id}")
    return guild


def set_notion_config(
    session: Session,
    guild_id: str,
    notion_api_key: str,
    notion_database_id: str,
    *,
    discord_user_id: str | None = None,
) -> Guild:
    """Store the Notion connection for a guild, creating the row if needed.

    :param session: Database session.
    :param guild_id: Discord guild ID.
    :param notion_api_key: Notion integration token, already passed through the secret provider.
    :param notion_database_id: Notion task database ID.
    :param discord_user_id: ID of the user who ran setup.
    :returns: The updated guild.
    """
    return upsert_guild(
        session,
        guild_id,
        discord_user_id=discord_user_id,
        notion_api_key=notion_api_key,
        notion_database_id=notion_database_id,
    )


def reset_notion_config(session: Session, guild_id: str) -> bool:
    """Clear the Notion connection for a guild, keeping the guild row.

    :param session: Database session.
    :param guild_id: Discord guild ID.
    :returns: True if the guild existed.
    """
    guild = get_guild(session, guild_id)
    if guild is None:
        logger.info(f"No guild to reset: guild_id={guild_id}")
        return False

    guild.notion_api_key = None
    guild.notion_database_id = None
    guild.updated_at = datetime.now(UTC)
    session.flush()
    logger.info(f"Reset Notion config for guild: guild_id={guild_id}")
    return True


def count_configured_guilds(session: Session) -> int:
    """Count guilds with both Notion settings stored.

    :param session: Database session.
    :returns: Number of configured guilds.
    """
    return (
        session.query(Guild)
        .filter(Guild.notion_api_key.is_not(None), Guild.notion_database_id.is_not(None))
        .count()
    )
