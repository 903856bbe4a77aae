"""Tests for bot guild configuration endpoints."""

import os

# Set required environment variables before importing API modules
os.environ.setdefault("API_AUTH_TOKEN", "test-auth-token")

import unittest

from fastapi.testclient import TestClient

from src.api.app import app
from src.api.dependencies import get_config_store
from src.guild_config.memory import InMemoryGuildConfigStore


class BotConfigTestCase(unittest.TestCase):
    """Shared setup: in-memory config store behind the API."""

    def setUp(self) -> None:
        """Set up test client with an in-memory store."""
        self.store = InMemoryGuildConfigStore()
        self.app = app
        self.app.dependency_overrides[get_config_store] = lambda: self.store
        self.client = TestClient(self.app)
        self.auth_headers = {"Authorization": "Bearer test-auth-token"}

    def tearDown(self) -> None:
        """Remove dependency overrides."""
        self.app.dependency_overrides.clear()


class TestGetConfig(BotConfigTestCase):
    """Tests for GET /bot/guilds/{guild_id}/config."""

    def test_returns_stored_config(self) -> None:
        """Test that the stored settings, including the key, are returned."""
        self.store.save("111", "secret_abc", "db-1", discord_user_id="42")

        response = self.client.get("/bot/guilds/111/config", headers=self.auth_headers)

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data["guild_id"], "111")
        self.assertEqual(data["notion_api_key"], "secret_abc")
        self.assertEqual(data["notion_database_id"], "db-1")
        self.assertEqual(data["discord_user_id"], "42")

    def test_unknown_guild_returns_404(self) -> None:
        """Test 404 for a guild with no settings."""
        response = self.client.get("/bot/guilds/999/config", headers=self.auth_headers)

        self.assertEqual(response.status_code, 404)

    def test_requires_auth(self) -> None:
        """Test that a missing bearer token is rejected."""
        response = self.client.get("/bot/guilds/111/config")

        self.assertEqual(response.status_code, 401)

    def test_wrong_token_returns_401(self) -> None:
        """Test that a wrong bearer token is rejected."""
        response = self.client.get(
            "/bot/guilds/111/config", headers={"Authorization": "Bearer wrong"}
        )

        self.assertEqual(response.status_code, 401)


class TestSaveConfig(BotConfigTestCase):
    """Tests for PUT /bot/guilds/{guild_id}/config."""

    def test_saves_config(self) -> None:
        """Test that settings are stored and echoed back."""
        response = self.client.put(
            "/bot/guilds/111/config",
            headers=self.auth_headers,
            json={"notion_api_key": "secret_abc", "notion_database_id": "db-1"},
        )

        self.assertEqual(response.status_code, 200)
        self.assertTrue(self.store.is_complete("111"))
        self.assertEqual(response.json()["notion_database_id"], "db-1")

    def test_blank_values_rejected(self) -> None:
        """Test that empty settings fail validation."""
        response = self.client.put(
            "/bot/guilds/111/config",
            headers=self.auth_headers,
            json={"notion_api_key": "", "notion_database_id": "db-1"},
        )

        self.assertEqual(response.status_code, 422)
        self.assertIsNone(self.store.get("111"))


class TestDeleteConfig(BotConfigTestCase):
    """Tests for DELETE /bot/guilds/{guild_id}/config."""

    def test_resets_config(self) -> None:
        """Test that reset clears the Notion settings."""
        self.store.save("111", "secret_abc", "db-1")

        response = self.client.delete("/bot/guilds/111/config", headers=self.auth_headers)

        self.assertEqual(response.status_code, 204)
        self.assertFalse(self.store.is_complete("111"))

    def test_unknown_guild_returns_404(self) -> None:
        """Test 404 when there is nothing to reset."""
        response = self.client.delete("/bot/guilds/999/config", headers=self.auth_headers)

        self.assertEqual(response.status_code, 404)


class TestCheckConfig(BotConfigTestCase):
    """Tests for GET /bot/guilds/{guild_id}/config/check."""

    def test_complete(self) -> None:
        """Test a guild with both settings."""
        self.store.save("111", "secret_abc", "db-1")

        response = self.client.get("/bot/guilds/111/config/check", headers=self.auth_headers)

        self.assertEqual(response.json(), {"guild_id": "111", "is_complete": True})

    def test_incomplete(self) -> None:
        """Test a guild that never ran setup."""
        response = self.client.get("/bot/guilds/999/config/check", headers=self.auth_headers)

        self.assertEqual(response.json(), {"guild_id": "999", "is_complete": False})


if __name__ == "__main__":
    unittest.main()
