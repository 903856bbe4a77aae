"""HTTP client the Discord bot uses to reach the guild settings routes."""

import logging
import os
from typing import Any

import requests
from requests.exceptions import RequestException

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8000"
DEFAULT_TIMEOUT = 30

HTTP_NO_CONTENT = 204
HTTP_NOT_FOUND = 404


class BotAPIError(Exception):
    """Raised when a call to the bot API fails."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        """Initialise the error.

        :param message: Error detail returned by the API, or the transport error.
        :param status_code: HTTP status code, None when no response arrived.
        """
        super().__init__(message)
        self.status_code = status_code

    @property
    def is_not_found(self) -> bool:
        """Whether the API answered 404."""
        return self.status_code == HTTP_NOT_FOUND


class BotAPIClient:
    """Client for the /bot/guilds routes.

    Lets the bot process read and write guild settings without holding
    database credentials itself. Request bodies are never logged since
    they carry Notion API keys.
    """

    def __init__(
        self,
        base_url: str | None = None,
        api_token: str | None = None,
        timeout: int = DEFAULT_TIMEOUT,
    ) -> None:
        """Initialise the client.

        :param base_url: API root. Defaults to the API_BASE_URL env var.
        :param api_token: Bearer token. Defaults to the API_AUTH_TOKEN env var.
        :param timeout: Request timeout in seconds.
        :raises ValueError: If no token is available.
        """
        self.base_url = (base_url or os.environ.get("API_BASE_URL", DEFAULT_BASE_URL)).rstrip("/")
        self.api_token = api_token or os.environ.get("API_AUTH_TOKEN")
        if not self.api_token:
            raise ValueError(
                "API authentication token not configured. Set API_AUTH_TOKEN environment variable."
            )

        self.timeout = timeout
        self._session = requests.Session()
        self._session.headers.update({"Authorization": f"Bearer {self.api_token}"})
        logger.debug(f"BotAPIClient initialised: base_url={self.base_url}")

    @staticmethod
    def _config_path(guild_id: str) -> str:
        return f"/bot/guilds/{guild_id}/config"

    def get_guild_config(self, guild_id: str) -> dict[str, Any] | None:
        """Fetch a guild's stored settings.

        :param guild_id: Discord guild ID.
        :returns: The settings payload, or None if the guild is unknown.
        :raises BotAPIError: On any failure other than 404.
        """
        try:
            return self._request("GET", self._config_path(guild_id))
        except BotAPIError as e:
            if e.is_not_found:
                return None
            raise

    def save_guild_config(self, guild_id: str, payload: dict[str, Any]) -> dict[str, Any]:
        """Create or replace a guild's settings.

        :param guild_id: Discord guild ID.
        :param payload: Request body for the PUT route.
        :returns: The stored settings.
        :raises BotAPIError: If the request fails.
        """
        return self._request("PUT", self._config_path(guild_id), json=payload)

    def delete_guild_config(self, guild_id: str) -> bool:
        """Clear a guild's settings.

        :returns: True if settings were cleared, False if there were none.
        :raises BotAPIError: On any failure other than 404.
        """
        try:
            self._request("DELETE", self._config_path(guild_id))
        except BotAPIError as e:
            if e.is_not_found:
                return False
            raise
        return True

    def check_guild_config(self, guild_id: str) -> bool:
        """Ask whether a guild has both Notion settings stored."""
        data = self._request("GET", f"{self._config_path(guild_id)}/check")
        return bool(data.get("is_complete", False))

    def _request(
        self, method: str, path: str, json: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        url = f"{self.base_url}{path}"
        logger.debug(f"Bot API request: {method} {path}")
        try:
            response = self._session.request(method, url, json=json, timeout=self.timeout)
        except RequestException as e:
            logger.exception(f"Bot API unreachable: {method} {path}")
            raise BotAPIError(f"Request failed: {e}") from e

        if not response.ok:
            detail = self._error_detail(response)
            logger.warning(f"Bot API error: {method} {path} -> {response.status_code}: {detail}")
            raise BotAPIError(detail, status_code=response.status_code)

        if response.status_code == HTTP_NO_CONTENT:
            return {}
        return dict(response.json())

    @staticmethod
    def _error_detail(response: requests.Response) -> str:
        """Pull FastAPI's detail field out of an error response.

        :param response: The failed response.
        :returns: A readable error message.
        """
        try:
            data = response.json()
        except ValueError:
            return response.text or f"HTTP {response.status_code}"
        if isinstance(data, dict) and "detail" in data:
            return str(data["detail"])
        return str(data)

    def close(self) -> None:
        """Close the HTTP session."""
        self._session.close()

    def __enter__(self) -> "BotAPIClient":
        """Enter context manager."""
        return self

    def __exit__(self, *args: object) -> None:
        """Exit context manager."""
        self.close()
