"""SQLAlchemy ORM model for Discord guild settings."""

from datetime import UTC, datetime

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.database.core import Base

DEFAULT_GUILD_NAME = "Unknown Guild"


class Guild(Base):
    """ORM model for a Discord guild and its Notion connection.

    One row per guild. Resetting the Notion connection clears the two
    Notion columns but keeps the row.
    """

    __tablename__ = "guilds"

    # Discord snowflakes exceed 32 bits and are handled as strings throughout
    guild_id: Mapped[str] = mapped_column(
        String(32),
        primary_key=True,
    )
    guild_name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        default=DEFAULT_GUILD_NAME,
    )
    bot_client_id: Mapped[str | None] = mapped_column(
        String(32),
        nullable=True,
    )
    discord_user_id: Mapped[str | None] = mapped_column(
        String(32),
        nullable=True,
    )
    notion_api_key: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
    notion_database_id: Mapped[str | None] = mapped_column(
        String(64),
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        index=True,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
    )

    @property
    def has_notion_config(self) -> bool:
        """Check whether both Notion settings are present."""
        return bool(self.notion_api_key and self.notion_database_id)

    def __repr__(self) -> str:
        """Return string representation of the guild."""
        return (
            f"<Guild(guild_id={self.guild_id}, name={self.guild_name!r}, "
            f"notion_configured={self.has_notion_config})>"
        )
