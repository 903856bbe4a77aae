"""Notion API endpoints for connection tests and task management."""

import logging

from fastapi import APIRouter

from src.api.models import NOTION_ERROR_RESPONSES
from src.api.notion.endpoints import router as connection_router
from src.api.notion.tasks.endpoints import router as tasks_router

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notion", responses=NOTION_ERROR_RESPONSES)

router.include_router(connection_router)
router.include_router(tasks_router)
