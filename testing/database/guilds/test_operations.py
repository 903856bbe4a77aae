"""Tests for guild database operations."""

import unittest
from unittest.mock import MagicMock, patch

from src.database.guilds.models import Guild
from src.database.guilds.operations import (
    get_guild,
    list_guilds,
    reset_notion_config,
    set_notion_config,
    upsert_guild,
)


def _session_returning(guild: Guild | None) -> MagicMock:
    session = MagicMock()
    session.query.return_value.filter.return_value.first.return_value = guild
    return session


class TestGetGuild(unittest.TestCase):
    """Tests for get_guild and list_guilds operations."""

    def test_returns_guild_when_found(self) -> None:
        """Test that get_guild returns the matching row."""
        guild = Guild(guild_id="123", guild_name="Team")
        session = _session_returning(guild)

        result = get_guild(session, "123")

        self.assertIs(result, guild)
        session.query.assert_called_once_with(Guild)

    def test_returns_none_when_missing(self) -> None:
        """Test that get_guild returns None for unknown guilds."""
        self.assertIsNone(get_guild(_session_returning(None), "999"))

    def test_list_guilds(self) -> None:
        """Test that list_guilds returns all rows."""
        session = MagicMock()
        guilds = [Guild(guild_id="1", guild_name="A"), Guild(guild_id="2", guild_name="B")]
        session.query.return_value.order_by.return_value.all.return_value = guilds

        self.assertEqual(list_guilds(session), guilds)


class TestUpsertGuild(unittest.TestCase):
    """Tests for upsert_guild operation."""

    def test_creates_guild_with_default_name(self) -> None:
        """Test that a new guild without a name is called Unknown Guild."""
        session = _session_returning(None)

        guild = upsert_guild(session, "123", bot_client_id="bot-1")

        self.assertEqual(guild.guild_id, "123")
        self.assertEqual(guild.guild_name, "Unknown Guild")
        self.assertEqual(guild.bot_client_id, "bot-1")
        session.add.assert_called_once_with(guild)
        session.flush.assert_called_once()

    def test_update_keeps_existing_values_when_not_given(self) -> None:
        """Test that None arguments leave existing columns untouched."""
        existing = Guild(
            guild_id="123",
            guild_name="Team",
            notion_api_key="secret_abc",
            notion_database_id="db-1",
        )
        session = _session_returning(existing)

        guild = upsert_guild(session, "123", guild_name="Renamed")

        self.assertIs(guild, existing)
        self.assertEqual(guild.guild_name, "Renamed")
        self.assertEqual(guild.notion_api_key, "secret_abc")
        self.assertEqual(guild.notion_database_id, "db-1")
        session.add.assert_not_called()

    def test_set_notion_config_creates_row(self) -> None:
        """Test that setup on an unknown guild creates the row."""
        session = _session_returning(None)

        guild = set_notion_config(session, "123", "secret_abc", "db-1", discord_user_id="42")

        self.assertEqual(guild.notion_api_key, "secret_abc")
        self.assertEqual(guild.notion_database_id, "db-1")
        self.assertEqual(guild.discord_user_id, "42")
        self.assertTrue(guild.has_notion_config)


class TestResetNotionConfig(unittest.TestCase):
    """Tests for reset_notion_config operation."""

    def test_clears_notion_fields_and_keeps_row(self) -> None:
        """Test that reset nulls the Notion columns only."""
        existing = Guild(
            guild_id="123",
            guild_name="Team",
            notion_api_key="secret_abc",
            notion_database_id="db-1",
        )
        session = _session_returning(existing)

        result = reset_notion_config(session, "123")

        self.assertTrue(result)
        self.assertIsNone(existing.notion_api_key)
        self.assertIsNone(existing.notion_database_id)
        self.assertEqual(existing.guild_name, "Team")
        self.assertFalse(existing.has_notion_config)
        session.delete.assert_not_called()

    def test_returns_false_for_unknown_guild(self) -> None:
        """Test that resetting an unknown guild is a no-op."""
        session = _session_returning(None)

        self.assertFalse(reset_notion_config(session, "999"))
        session.flush.assert_not_called()


class TestDatabaseUrl(unittest.TestCase):
    """Tests for database URL construction."""

    @patch.dict(
        "os.environ",
        {"DATABASE_HOST": "db", "DATABASE_PORT": "6543", "APP_DB_PASSWORD": "pw"},
        clear=True,
    )
    def test_url_built_from_environment(self) -> None:
        """Test that the URL uses host, port and password from the environment."""
        from src.database.connection import get_database_url

        self.assertEqual(
            get_database_url(), "postgresql+psycopg2://app:pw@db:6543/notion_task_bot"
        )

    @patch.dict("os.environ", {"DATABASE_URL": "sqlite:///local.db"}, clear=True)
    def test_database_url_override(self) -> None:
        """Test that DATABASE_URL is used as-is when set."""
        from src.database.connection import get_database_url, is_database_configured

        self.assertEqual(get_database_url(), "sqlite:///local.db")
        self.assertTrue(is_database_configured())

    @patch.dict("os.environ", {}, clear=True)
    def test_not_configured_without_host(self) -> None:
        """Test that a missing host means the database is not configured."""
        from src.database.connection import is_database_configured

        self.assertFalse(is_database_configured())

    @patch.dict("os.environ", {"DATABASE_HOST": "db"}, clear=True)
    def test_partial_settings_raise(self) -> None:
        """Test that a host without a password cannot build a URL."""
        from src.database.connection import get_database_url, is_database_configured

        self.assertFalse(is_database_configured())
        with self.assertRaises(KeyError):
            get_database_url()


if __name__ == "__main__":
    unittest.main()
