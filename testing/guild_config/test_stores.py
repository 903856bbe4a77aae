"""Tests for guild configuration stores."""

import unittest
from contextlib import contextmanager
from unittest.mock import MagicMock, patch

from src.api.client import BotAPIError
from src.database.guilds.models import Guild
from src.guild_config import (
    APIGuildConfigStore,
    DatabaseGuildConfigStore,
    InMemoryGuildConfigStore,
    SecretProvider,
    create_config_store,
)
from src.guild_config.models import GuildConfig


class _ReversingSecretProvider(SecretProvider):
    def encrypt(self, value: str) -> str:
        return value[::-1]

    def decrypt(self, value: str) -> str:
        return value[::-1]


class TestGuildConfig(unittest.TestCase):
    """Tests for the GuildConfig model."""

    def test_is_complete_requires_both_fields(self) -> None:
        """Test that completeness needs both key and database ID."""
        self.assertTrue(
            GuildConfig(guild_id="1", notion_api_key="k", notion_database_id="d").is_complete
        )
        self.assertFalse(GuildConfig(guild_id="1", notion_api_key="k").is_complete)
        self.assertFalse(
            GuildConfig(guild_id="1", notion_api_key="", notion_database_id="d").is_complete
        )

    def test_masked_api_key(self) -> None:
        """Test that the masked key only shows a prefix."""
        config = GuildConfig(guild_id="1", notion_api_key="secret_abcdefghijk")

        self.assertEqual(config.masked_api_key, "secret_...")
        self.assertIsNone(GuildConfig(guild_id="1").masked_api_key)


class TestInMemoryGuildConfigStore(unittest.TestCase):
    """Tests for InMemoryGuildConfigStore."""

    def setUp(self) -> None:
        """Set up an empty store."""
        self.store = InMemoryGuildConfigStore()

    def test_unknown_guild(self) -> None:
        """Test that unknown guilds have no config and are incomplete."""
        self.assertIsNone(self.store.get("1"))
        self.assertFalse(self.store.is_complete("1"))

    def test_save_then_get(self) -> None:
        """Test that saved settings are returned and complete."""
        self.store.save("1", "secret_abc", "db-1", discord_user_id="42")

        config = self.store.get("1")

        self.assertIsNotNone(config)
        self.assertEqual(config.notion_database_id, "db-1")
        self.assertEqual(config.discord_user_id, "42")
        self.assertTrue(self.store.is_complete("1"))

    def test_save_keeps_created_at(self) -> None:
        """Test that saving again keeps the original creation time."""
        first = self.store.save("1", "secret_abc", "db-1")
        second = self.store.save("1", "secret_xyz", "db-2")

        self.assertEqual(first.created_at, second.created_at)
        self.assertEqual(second.notion_api_key, "secret_xyz")

    def test_delete_clears_notion_fields_only(self) -> None:
        """Test that delete keeps the guild but clears its settings."""
        self.store.save("1", "secret_abc", "db-1", discord_user_id="42")

        self.assertTrue(self.store.delete("1"))

        config = self.store.get("1")
        self.assertIsNotNone(config)
        self.assertIsNone(config.notion_api_key)
        self.assertIsNone(config.notion_database_id)
        self.assertEqual(config.discord_user_id, "42")
        self.assertFalse(self.store.is_complete("1"))

    def test_delete_unknown_guild(self) -> None:
        """Test that deleting an unknown guild returns False."""
        self.assertFalse(self.store.delete("1"))

    def test_returned_config_is_a_copy(self) -> None:
        """Test that mutating a returned config does not change the store."""
        self.store.save("1", "secret_abc", "db-1")

        config = self.store.get("1")
        config.notion_database_id = "changed"

        self.assertEqual(self.store.get("1").notion_database_id, "db-1")


class TestDatabaseGuildConfigStore(unittest.TestCase):
    """Tests for DatabaseGuildConfigStore."""

    def setUp(self) -> None:
        """Set up a store with a mocked session."""
        self.session = MagicMock()

        @contextmanager
        def session_factory():  # type: ignore[no-untyped-def]
            yield self.session

        self.store = DatabaseGuildConfigStore(
            secret_provider=_ReversingSecretProvider(), session_factory=session_factory
        )

    @patch("src.guild_config.database.get_guild")
    def test_get_decrypts_api_key(self, mock_get_guild: MagicMock) -> None:
        """Test that the stored key is decrypted on read."""
        mock_get_guild.return_value = Guild(
            guild_id="1",
            guild_name="Team",
            notion_api_key="cba_terces",
            notion_database_id="db-1",
        )

        config = self.store.get("1")

        self.assertEqual(config.notion_api_key, "secret_abc")
        self.assertEqual(config.guild_name, "Team")
        mock_get_guild.assert_called_once_with(self.session, "1")

    @patch("src.guild_config.database.get_guild")
    def test_get_unknown_guild(self, mock_get_guild: MagicMock) -> None:
        """Test that an unknown guild returns None."""
        mock_get_guild.return_value = None

        self.assertIsNone(self.store.get("1"))

    @patch("src.guild_config.database.set_notion_config")
    def test_save_encrypts_api_key(self, mock_set: MagicMock) -> None:
        """Test that the key is encrypted before it reaches the database."""
        mock_set.return_value = Guild(
            guild_id="1", notion_api_key="cba_terces", notion_database_id="db-1"
        )

        config = self.store.save("1", "secret_abc", "db-1", discord_user_id="42")

        mock_set.assert_called_once_with(
            self.session, "1", "cba_terces", "db-1", discord_user_id="42"
        )
        self.assertEqual(config.notion_api_key, "secret_abc")

    @patch("src.guild_config.database.reset_notion_config")
    def test_delete_resets_config(self, mock_reset: MagicMock) -> None:
        """Test that delete resets the Notion columns."""
        mock_reset.return_value = True

        self.assertTrue(self.store.delete("1"))
        mock_reset.assert_called_once_with(self.session, "1")


class TestAPIGuildConfigStore(unittest.TestCase):
    """Tests for APIGuildConfigStore."""

    def setUp(self) -> None:
        """Set up a store with a mocked API client."""
        self.client = MagicMock()
        self.store = APIGuildConfigStore(client=self.client)

    def test_get_returns_config(self) -> None:
        """Test that get parses the API response."""
        self.client.get_guild_config.return_value = {
            "guild_id": "1",
            "notion_api_key": "secret_abc",
            "notion_database_id": "db-1",
        }

        config = self.store.get("1")

        self.assertTrue(config.is_complete)
        self.client.get_guild_config.assert_called_once_with("1")

    def test_get_unknown_guild_returns_none(self) -> None:
        """Test that an unknown guild gives None."""
        self.client.get_guild_config.return_value = None

        self.assertIsNone(self.store.get("1"))

    def test_get_error_propagates(self) -> None:
        """Test that API failures are raised."""
        self.client.get_guild_config.side_effect = BotAPIError("boom", status_code=500)

        with self.assertRaises(BotAPIError):
            self.store.get("1")

    def test_save_sends_settings(self) -> None:
        """Test that save sends the settings and the acting user."""
        self.client.save_guild_config.return_value = {
            "guild_id": "1",
            "notion_api_key": "secret_abc",
            "notion_database_id": "db-1",
        }

        config = self.store.save("1", "secret_abc", "db-1", discord_user_id="42")

        self.assertEqual(config.notion_database_id, "db-1")
        self.client.save_guild_config.assert_called_once_with(
            "1",
            {
                "notion_api_key": "secret_abc",
                "notion_database_id": "db-1",
                "discord_user_id": "42",
            },
        )

    def test_delete(self) -> None:
        """Test that delete reports whether settings existed."""
        self.client.delete_guild_config.return_value = True
        self.assertTrue(self.store.delete("1"))

        self.client.delete_guild_config.return_value = False
        self.assertFalse(self.store.delete("2"))

    def test_is_complete_uses_check(self) -> None:
        """Test that completeness comes from the check route."""
        self.client.check_guild_config.return_value = True

        self.assertTrue(self.store.is_complete("1"))
        self.client.check_guild_config.assert_called_once_with("1")


class TestCreateConfigStore(unittest.TestCase):
    """Tests for create_config_store."""

    def test_memory_backend(self) -> None:
        """Test that the memory backend is selectable."""
        self.assertIsInstance(create_config_store("memory"), InMemoryGuildConfigStore)

    @patch.dict("os.environ", {"GUILD_CONFIG_STORE": "database"})
    def test_backend_from_environment(self) -> None:
        """Test that the backend defaults to GUILD_CONFIG_STORE."""
        self.assertIsInstance(create_config_store(), DatabaseGuildConfigStore)

    def test_unknown_backend_raises(self) -> None:
        """Test that unknown backends are rejected."""
        with self.assertRaises(ValueError):
            create_config_store("redis")


if __name__ == "__main__":
    unittest.main()
