"""Notion API endpoints that take credentials directly."""

import logging

from fastapi import APIRouter

from src.api.notion.dependencies import notion_error_to_http
from src.api.notion.models import ConnectionTestRequest, ConnectionTestResponse
from src.notion.client import NotionClient
from src.notion.exceptions import NotionClientError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Notion - Connection"])


@router.post(
    "/test",
    response_model=ConnectionTestResponse,
    summary="Test Notion connection",
    description="Check that an API key can read a database, without storing either.",
)
def test_connection(request: ConnectionTestRequest) -> ConnectionTestResponse:
    """Test a Notion API key and database ID."""
    logger.info(f"Testing Notion connection: database_id={request.database_id}")
    try:
        client = NotionClient(request.api_key, request.database_id)
        result = client.test_connection()
    except NotionClientError as e:
        logger.exception(f"[notion-test] connection test failed: code={e.code}")
        raise notion_error_to_http(e) from e

    return ConnectionTestResponse(success=result.success, database=result.database)
