"""Custom exceptions for the Notion API client."""

from typing import Any

from src.notion.enums import ErrorCode


class NotionClientError(Exception):
    """Raised when a Notion API request fails.

    Every failure carries a machine-readable code, optional details for
    diagnostics, and whether the request may succeed if attempted again.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.API_ERROR,
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        """Initialise the error.

        :param message: Human readable error message.
        :param code: Failure code from the client error taxonomy.
        :param details: Extra context (status, response body, resource id).
        :param retryable: Whether the failed call may be retried.
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}
        self.retryable = retryable

    def to_dict(self) -> dict[str, Any]:
        """Serialise the error for API responses and logs.

        :returns: Dictionary with code, message, details and retryable.
        """
        return {
            "code": self.code.value,
            "message": self.message,
            "details": self.details,
            "retryable": self.retryable,
        }


class NotionInvalidKeyError(NotionClientError):
    """Raised when Notion rejects the integration token (HTTP 401)."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialise the error.

        :param message: Error message.
        :param details: Extra context.
        """
        super().__init__(message, ErrorCode.INVALID_KEY, details)


class NotionAccessDeniedError(NotionClientError):
    """Raised when the integration is not shared with the resource (HTTP 403)."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialise the error.

        :param message: Error message.
        :param details: Extra context.
        """
        super().__init__(message, ErrorCode.ACCESS_DENIED, details)


class NotionNotFoundError(NotionClientError):
    """Raised when a database or page does not exist (HTTP 404)."""

    def __init__(
        self, message: str, resource_id: str, details: dict[str, Any] | None = None
    ) -> None:
        """Initialise the error.

        :param message: Error message.
        :param resource_id: ID of the database or page that was not found.
        :param details: Extra context.
        """
        self.resource_id = resource_id
        super().__init__(
            message, ErrorCode.NOT_FOUND, {"resource_id": resource_id, **(details or {})}
        )


class NotionRateLimitedError(NotionClientError):
    """Raised when Notion throttles the integration (HTTP 429)."""

    def __init__(
        self,
        message: str,
        retry_after: float | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialise the error.

        :param message: Error message.
        :param retry_after: Seconds to wait before retrying, from Retry-After.
        :param details: Extra context.
        """
        self.retry_after = retry_after
        super().__init__(
            message,
            ErrorCode.RATE_LIMITED,
            {"retry_after": retry_after, **(details or {})},
            retryable=True,
        )


class NotionNetworkError(NotionClientError):
    """Raised when the request never produced an HTTP response."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialise the error.

        :param message: Error message.
        :param details: Extra context.
        """
        super().__init__(message, ErrorCode.NETWORK_ERROR, details, retryable=True)


class NotionAPIError(NotionClientError):
    """Catch-all for other non-2xx responses.

    Server errors (5xx) are retryable, anything else is not.
    """

    def __init__(self, message: str, status_code: int, body: str) -> None:
        """Initialise the error.

        :param message: Error message.
        :param status_code: HTTP status code returned by Notion.
        :param body: Raw response body.
        """
        self.status_code = status_code
        super().__init__(
            message,
            ErrorCode.API_ERROR,
            {"status": status_code, "body": body},
            retryable=status_code >= 500,
        )


class NotionValidationError(NotionClientError):
    """Raised when input is rejected before any request is made."""

    def __init__(self, field: str, message: str) -> None:
        """Initialise the error.

        :param field: Name of the invalid field.
        :param message: What is wrong with it.
        """
        self.field = field
        super().__init__(
            f"{field}: {message}", ErrorCode.VALIDATION_ERROR, {"field": field}
        )


class GuildNotConfiguredError(NotionClientError):
    """Raised when a guild has no complete Notion configuration."""

    def __init__(self, guild_id: str) -> None:
        """Initialise the error.

        :param guild_id: The Discord guild ID.
        """
        self.guild_id = guild_id
        super().__init__(
            f"Notion is not configured for guild {guild_id}",
            ErrorCode.NOT_CONFIGURED,
            {"guild_id": guild_id},
        )


def describe_error(error: NotionClientError) -> str:
    """Render a user-facing message for a client error.

    Adds guidance for the failures users can fix themselves.

    :param error: The error to describe.
    :returns: Message suitable for a dashboard or chat reply.
    """
    match error.code:
        case ErrorCode.INVALID_KEY:
            return (
                f"{error.message} Check that the integration token "
                "(starting with ntn_ or secret_) is correct."
            )
        case ErrorCode.NOT_FOUND:
            return (
                f"{error.message} Check the database ID and that the integration "
                "has been added to the database."
            )
        case ErrorCode.ACCESS_DENIED:
            return f"{error.message} Share the database with the integration."
        case ErrorCode.NOT_CONFIGURED:
            return "Notion is not configured yet. Run /setup first."
        case _:
            return error.message
