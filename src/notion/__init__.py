"""Notion API integration module for querying and managing tasks."""

from src.notion.client import NotionClient
from src.notion.exceptions import NotionClientError, describe_error
from src.notion.models import ConnectionTestResult, NotionDatabase, NotionTask, TaskCreate, TaskUpdate
from src.notion.retry import retry

__all__ = [
    "ConnectionTestResult",
    "NotionClient",
    "NotionClientError",
    "NotionDatabase",
    "NotionTask",
    "TaskCreate",
    "TaskUpdate",
    "describe_error",
    "retry",
]
