"""Enums for Notion task field values and client error codes."""

from enum import StrEnum


class TaskStatus(StrEnum):
    """Conventional status labels for tasks.

    Notion select options are user-defined, so these are defaults rather
    than a closed set.
    """

    NOT_STARTED = "Not Started"
    IN_PROGRESS = "In Progress"
    DONE = "Done"
    ON_HOLD = "On Hold"
    CANCELLED = "Cancelled"


class Priority(StrEnum):
    """Conventional priority labels for tasks."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    URGENT = "Urgent"


class ErrorCode(StrEnum):
    """Failure codes surfaced to callers of the Notion client."""

    INVALID_KEY = "invalid-key"
    NOT_FOUND = "not-found"
    ACCESS_DENIED = "access-denied"
    RATE_LIMITED = "rate-limited"
    NETWORK_ERROR = "network-error"
    API_ERROR = "generic-api-error"
    VALIDATION_ERROR = "validation-error"
    NOT_CONFIGURED = "not-configured"
