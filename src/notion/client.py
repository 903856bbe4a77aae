"""Notion API client for a single guild's task database."""

import logging
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

import requests

from src.notion.exceptions import (
    NotionAccessDeniedError,
    NotionAPIError,
    NotionClientError,
    NotionInvalidKeyError,
    NotionNetworkError,
    NotionNotFoundError,
    NotionRateLimitedError,
    NotionValidationError,
)
from src.notion.models import ConnectionTestResult, NotionDatabase, NotionTask, TaskCreate, TaskUpdate
from src.notion.parser import (
    build_description_blocks,
    parse_database,
    parse_notion_timestamp,
    parse_page_to_task,
    to_notion_properties,
)
from src.notion.retry import retry

logger = logging.getLogger(__name__)

# Notion API timeout in seconds
REQUEST_TIMEOUT = 30

# Notion API version
NOTION_VERSION = "2022-06-28"

# Largest page the query endpoint returns; there is no cursor handling beyond it
MAX_PAGE_SIZE = 100


def _newest_first(tasks: list[NotionTask]) -> list[NotionTask]:
    """Order tasks by created_time descending, unparseable times last."""

    def key(task: NotionTask) -> tuple[bool, datetime]:
        created = parse_notion_timestamp(task.created_time)
        return created is not None, created or datetime.min.replace(tzinfo=UTC)

    return sorted(tasks, key=key, reverse=True)


class NotionClient:
    """Client for one Notion task database.

    Holds nothing but the credentials, so it is cheap to construct per
    request. Every call is retried on rate limits, server errors and
    network failures.
    """

    BASE_URL = "https://api.notion.com/v1"

    def __init__(
        self,
        api_key: str,
        database_id: str,
        *,
        max_attempts: int = 3,
        base_delay: float = 1.0,
    ) -> None:
        """Initialise the Notion client.

        :param api_key: Notion integration token.
        :param database_id: ID of the task database.
        :param max_attempts: Attempts per request, including the first.
        :param base_delay: Base backoff delay in seconds.
        :raises NotionValidationError: If either credential is empty.
        """
        if not api_key:
            raise NotionValidationError("api_key", "Notion API key is required")
        if not database_id:
            raise NotionValidationError("database_id", "Notion database ID is required")

        self._api_key = api_key
        self._database_id = database_id
        self._max_attempts = max_attempts
        self._base_delay = base_delay

        logger.debug(f"NotionClient initialised: database_id={database_id}")

    @property
    def database_id(self) -> str:
        """ID of the task database this client targets."""
        return self._database_id

    @property
    def _headers(self) -> dict[str, str]:
        """Headers for Notion API requests.

        :returns: Dictionary of required headers.
        """
        return {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
            "Notion-Version": NOTION_VERSION,
        }

    def _call(self, context: str, operation: Callable[[], dict[str, Any]]) -> dict[str, Any]:
        return retry(
            operation,
            self._max_attempts,
            self._base_delay,
            context=context,
        )

    def _send(
        self,
        send: Callable[..., requests.Response],
        endpoint: str,
        resource_id: str,
        payload: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Make a single request to the Notion API.

        :param send: One of requests.get, requests.post or requests.patch.
        :param endpoint: API endpoint path (without base URL).
        :param resource_id: Database or page ID, reported on 404.
        :param payload: Optional JSON body.
        :returns: JSON response as dictionary.
        :raises NotionClientError: If the request fails.
        """
        url = f"{self.BASE_URL}/{endpoint}"
        kwargs: dict[str, Any] = {"headers": self._headers, "timeout": REQUEST_TIMEOUT}
        if payload is not None:
            kwargs["json"] = payload

        try:
            response = send(url, **kwargs)
        except requests.exceptions.Timeout as e:
            raise NotionNetworkError(
                f"Notion API request timed out after {REQUEST_TIMEOUT}s",
                {"endpoint": endpoint},
            ) from e
        except requests.exceptions.ConnectionError as e:
            raise NotionNetworkError(
                f"Could not connect to Notion API: {e}", {"endpoint": endpoint}
            ) from e
        except requests.exceptions.RequestException as e:
            raise NotionClientError(f"Notion API request failed: {e}") from e

        self._raise_for_status(response, resource_id)
        try:
            return response.json()
        except ValueError as e:
            raise NotionAPIError(
                f"Notion API returned a non-JSON body from {endpoint}",
                response.status_code,
                response.text,
            ) from e

    def _get(self, endpoint: str, resource_id: str) -> dict[str, Any]:
        logger.debug(f"Making GET request to endpoint={endpoint}")
        return self._send(requests.get, endpoint, resource_id)

    def _post(self, endpoint: str, payload: dict[str, Any], resource_id: str) -> dict[str, Any]:
        logger.debug(f"Making POST request to endpoint={endpoint}")
        return self._send(requests.post, endpoint, resource_id, payload)

    def _patch(self, endpoint: str, payload: dict[str, Any], resource_id: str) -> dict[str, Any]:
        logger.debug(f"Making PATCH request to endpoint={endpoint}")
        return self._send(requests.patch, endpoint, resource_id, payload)

    def _raise_for_status(self, response: requests.Response, resource_id: str) -> None:
        """Map a non-2xx response onto the client error taxonomy.

        :param response: Response from Notion.
        :param resource_id: Database or page ID the request targeted.
        :raises NotionClientError: If the status is not 2xx.
        """
        status = response.status_code
        if status < 400:
            return

        message = self._extract_error_message(response)

        if status == 401:
            raise NotionInvalidKeyError(f"Invalid Notion API key: {message}")
        if status == 403:
            raise NotionAccessDeniedError(f"Access denied by Notion: {message}")
        if status == 404:
            raise NotionNotFoundError(f"Notion resource not found: {resource_id}", resource_id)
        if status == 429:
            raise NotionRateLimitedError(
                "Notion API rate limit exceeded",
                retry_after=self._parse_retry_after(response),
            )
        raise NotionAPIError(
            f"Notion API request failed: {status} - {message}", status, response.text
        )

    def _extract_error_message(self, response: requests.Response) -> str:
        """Extract error message from Notion API error response.

        :param response: Response object from failed request.
        :returns: Error message string.
        """
        try:
            data = response.json()
            return data.get("message", response.text)
        except ValueError:
            return response.text

    @staticmethod
    def _parse_retry_after(response: requests.Response) -> float | None:
        value = response.headers.get("Retry-After")
        if value is None:
            return None
        try:
            return float(value)
        except ValueError:
            return None

    # Database endpoints

    def get_database(self) -> NotionDatabase:
        """Retrieve the task database's title and property schema.

        :returns: Database summary.
        :raises NotionClientError: If the request fails.
        """
        logger.info(f"Retrieving database: {self._database_id}")
        data = self._call(
            "get-database",
            lambda: self._get(f"databases/{self._database_id}", self._database_id),
        )
        return parse_database(data)

    def get_tasks(
        self,
        filter_: dict[str, Any] | None = None,
        *,
        page_size: int = MAX_PAGE_SIZE,
    ) -> list[NotionTask]:
        """Query tasks from the database, newest first.

        Only the first page of results is read, so databases with more than
        100 matching rows are truncated.

        :param filter_: Optional Notion filter object, passed through as-is.
        :param page_size: Number of results to request (max 100).
        :returns: Tasks sorted by created_time, descending.
        :raises NotionClientError: If the request fails.
        """
        logger.info(f"Querying tasks from database: {self._database_id}")
        payload: dict[str, Any] = {"page_size": min(page_size, MAX_PAGE_SIZE)}

        if filter_ is not None:
            payload["filter"] = filter_

        data = self._call(
            "get-tasks",
            lambda: self._post(f"databases/{self._database_id}/query", payload, self._database_id),
        )

        tasks = _newest_first([parse_page_to_task(page) for page in data.get("results", [])])

        logger.info(f"Retrieved {len(tasks)} tasks from database: {self._database_id}")
        return tasks

    # Page endpoints

    def create_task(self, task: TaskCreate) -> NotionTask:
        """Create a new task page in the database.

        Retried like every other call, so a timeout after Notion has stored
        the page can produce a duplicate.

        :param task: Fields for the new task.
        :returns: The created task.
        :raises NotionClientError: If the request fails.
        """
        logger.info(f"Creating task in database: {self._database_id}")
        payload: dict[str, Any] = {
            "parent": {"database_id": self._database_id},
            "properties": to_notion_properties(task),
        }

        children = build_description_blocks(task.description)
        if children:
            payload["children"] = children

        data = self._call(
            "create-task", lambda: self._post("pages", payload, self._database_id)
        )
        return parse_page_to_task(data)

    def update_task(self, task_id: str, task: TaskUpdate) -> NotionTask:
        """Update only the properties that are set on the update.

        The description lives in the page body and is not changed here.

        :param task_id: Notion page ID.
        :param task: Fields to change.
        :returns: The updated task.
        :raises NotionClientError: If the request fails.
        """
        logger.info(f"Updating task: {task_id}")
        payload = {"properties": to_notion_properties(task)}
        data = self._call(
            "update-task", lambda: self._patch(f"pages/{task_id}", payload, task_id)
        )
        return parse_page_to_task(data)

    def delete_task(self, task_id: str) -> None:
        """Archive a task page.

        Notion has no hard delete for pages; the page is moved to trash and
        its ID is never reused.

        :param task_id: Notion page ID.
        :raises NotionClientError: If the request fails.
        """
        logger.info(f"Archiving task: {task_id}")
        self._call(
            "delete-task",
            lambda: self._patch(f"pages/{task_id}", {"archived": True}, task_id),
        )

    def test_connection(self) -> ConnectionTestResult:
        """Check the credentials by fetching the database.

        :returns: Result holding the database summary.
        :raises NotionClientError: If the database cannot be retrieved.
        """
        database = self.get_database()
        logger.info(f"Notion connection OK: database={database.title}")
        return ConnectionTestResult(success=True, database=database)
