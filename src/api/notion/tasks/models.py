"""Pydantic models for Notion task endpoints."""

from pydantic import BaseModel, Field

from src.notion.enums import Priority, TaskStatus
from src.notion.models import NotionTask


class TaskCreateRequest(BaseModel):
    """Request model for task creation.

    Status and priority are free text since Notion options are user-defined.
    """

    title: str = Field(..., min_length=1, description="Task title")
    description: str | None = Field(None, description="Plain text for the page body")
    status: str = Field(
        default=TaskStatus.NOT_STARTED.value,
        description=f"Task status (default: {TaskStatus.NOT_STARTED}) ({', '.join(TaskStatus)})",
    )
    priority: str = Field(
        default=Priority.MEDIUM.value,
        description=f"Task priority (default: {Priority.MEDIUM}) ({', '.join(Priority)})",
    )
    assignee: str | None = Field(None, description="Assignee display name")
    due_date: str | None = Field(None, description="Due date as an ISO-8601 string")
    tags: list[str] | None = Field(None, description="Task tags")


class TaskUpdateRequest(BaseModel):
    """Request model for partial task update. Omitted fields are left untouched."""

    title: str | None = Field(None, min_length=1, description="Task title")
    status: str | None = Field(None, description=f"Task status ({', '.join(TaskStatus)})")
    priority: str | None = Field(None, description=f"Task priority ({', '.join(Priority)})")
    assignee: str | None = Field(None, description="Assignee display name")
    due_date: str | None = Field(None, description="Due date as an ISO-8601 string")
    tags: list[str] | None = Field(None, description="Task tags")


class TaskListResponse(BaseModel):
    """Response model for listing tasks."""

    results: list[NotionTask] = Field(default_factory=list, description="Matching tasks")


class TaskDeleteResponse(BaseModel):
    """Response model for task deletion."""

    id: str = Field(..., description="Archived task page ID")
    archived: bool = Field(True, description="Whether the page is archived")
