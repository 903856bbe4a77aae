"""Pydantic models for Notion API data."""

from typing import Any

from pydantic import BaseModel, Field


class NotionTask(BaseModel):
    """A task from Notion with parsed properties.

    Represents a page from the task database with task-specific
    properties extracted and normalised.
    """

    id: str = Field(..., min_length=1, description="Notion page ID")
    title: str = Field(..., min_length=1, description="Task title")
    description: str | None = Field(None, description="Task description")
    status: str | None = Field(None, description="Task status")
    priority: str | None = Field(None, description="Task priority level")
    assignee: str | None = Field(None, description="Assignee display name")
    due_date: str | None = Field(None, description="Due date as an ISO-8601 string")
    tags: list[str] | None = Field(None, description="Task tags")
    created_time: str | None = Field(None, description="Page creation timestamp")
    last_edited_time: str | None = Field(None, description="Last edit timestamp")
    url: str | None = Field(None, description="Notion page URL")


class TaskCreate(BaseModel):
    """Fields for a new task. Only the title is required."""

    title: str = Field(..., min_length=1, description="Task title")
    description: str | None = Field(None, description="Written as the page body")
    status: str | None = Field(None, description="Task status")
    priority: str | None = Field(None, description="Task priority level")
    assignee: str | None = Field(None, description="Assignee display name")
    due_date: str | None = Field(None, description="Due date as an ISO-8601 string")
    tags: list[str] | None = Field(None, description="Task tags")


class TaskUpdate(BaseModel):
    """Partial task update. Unset fields leave the Notion property untouched."""

    title: str | None = Field(None, min_length=1, description="Task title")
    description: str | None = Field(None, description="Ignored on update")
    status: str | None = Field(None, description="Task status")
    priority: str | None = Field(None, description="Task priority level")
    assignee: str | None = Field(None, description="Assignee display name")
    due_date: str | None = Field(None, description="Due date as an ISO-8601 string")
    tags: list[str] | None = Field(None, description="Task tags")


class NotionDatabase(BaseModel):
    """Summary of a Notion database."""

    id: str = Field(..., description="Database ID")
    title: str = Field(..., description="Database title")
    url: str | None = Field(None, description="Database URL")
    properties: dict[str, Any] = Field(default_factory=dict, description="Property schema")


class ConnectionTestResult(BaseModel):
    """Result of a successful connection test."""

    success: bool = Field(default=True)
    database: NotionDatabase
