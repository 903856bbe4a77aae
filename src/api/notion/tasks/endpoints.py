"""Notion task endpoints for the dashboard.

Every route takes a guild_id query parameter and uses that guild's stored
Notion connection.
"""

import logging

from fastapi import APIRouter, Depends, Query, status

from src.api.notion.dependencies import get_guild_notion_client, notion_error_to_http
from src.api.notion.tasks.models import (
    TaskCreateRequest,
    TaskDeleteResponse,
    TaskListResponse,
    TaskUpdateRequest,
)
from src.notion.client import NotionClient
from src.notion.exceptions import NotionClientError, NotionValidationError
from src.notion.models import NotionTask, TaskCreate, TaskUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tasks", tags=["Notion - Task Management"])


@router.get(
    "",
    response_model=TaskListResponse,
    summary="List tasks",
)
def list_tasks(
    status_filter: str | None = Query(None, alias="status"),
    assignee: str | None = None,
    client: NotionClient = Depends(get_guild_notion_client),
) -> TaskListResponse:
    """List a guild's tasks, newest first, optionally filtered by status and assignee."""
    logger.debug(f"Listing tasks: status={status_filter} assignee={assignee}")
    try:
        tasks = client.get_tasks()
    except NotionClientError as e:
        logger.exception(f"[tasks-list] failed to list tasks: code={e.code}")
        raise notion_error_to_http(e) from e

    results = [
        task
        for task in tasks
        if (status_filter is None or task.status == status_filter)
        and (assignee is None or task.assignee == assignee)
    ]
    return TaskListResponse(results=results)


@router.post(
    "",
    response_model=NotionTask,
    status_code=status.HTTP_201_CREATED,
    summary="Create task",
)
def create_task(
    request: TaskCreateRequest,
    client: NotionClient = Depends(get_guild_notion_client),
) -> NotionTask:
    """Create a task in the guild's database."""
    logger.info("Creating task")
    try:
        return client.create_task(TaskCreate(**request.model_dump()))
    except NotionClientError as e:
        logger.exception(f"[tasks-create] failed to create task: code={e.code}")
        raise notion_error_to_http(e) from e


@router.patch(
    "/{task_id}",
    response_model=NotionTask,
    summary="Update task",
)
def update_task(
    task_id: str,
    request: TaskUpdateRequest,
    client: NotionClient = Depends(get_guild_notion_client),
) -> NotionTask:
    """Update the given fields of a task."""
    logger.info(f"Updating task: {task_id}")
    update = TaskUpdate(**request.model_dump(exclude_unset=True))
    if not update.model_dump(exclude_none=True):
        raise notion_error_to_http(NotionValidationError("task", "No fields to update"))

    try:
        return client.update_task(task_id, update)
    except NotionClientError as e:
        logger.exception(f"[tasks-update] failed to update task {task_id}: code={e.code}")
        raise notion_error_to_http(e) from e


@router.delete(
    "/{task_id}",
    response_model=TaskDeleteResponse,
    summary="Delete task",
)
def delete_task(
    task_id: str,
    client: NotionClient = Depends(get_guild_notion_client),
) -> TaskDeleteResponse:
    """Archive a task. Notion keeps archived pages in its trash."""
    logger.info(f"Archiving task: {task_id}")
    try:
        client.delete_task(task_id)
    except NotionClientError as e:
        logger.exception(f"[tasks-delete] failed to archive task {task_id}: code={e.code}")
        raise notion_error_to_http(e) from e
    return TaskDeleteResponse(id=task_id)
