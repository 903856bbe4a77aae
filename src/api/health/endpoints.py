"""Health check endpoints."""

import logging
import os
from datetime import UTC, datetime

from fastapi import APIRouter
from sqlalchemy.exc import SQLAlchemyError

from src.api.health.models import CheckStatus, HealthChecks, HealthResponse
from src.database.connection import get_session, is_database_configured
from src.database.guilds import count_configured_guilds

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])

VERSION = "0.1.0"


def _check_database() -> tuple[CheckStatus, CheckStatus]:
    """Check the database and whether any guild has a Notion connection.

    :returns: Database status and Notion status.
    """
    if not is_database_configured():
        return CheckStatus.NOT_CONFIGURED, CheckStatus.UNKNOWN

    try:
        with get_session() as session:
            configured = count_configured_guilds(session)
    except SQLAlchemyError:
        logger.exception("Health check database query failed")
        return CheckStatus.ERROR, CheckStatus.UNKNOWN

    notion = CheckStatus.CONFIGURED if configured else CheckStatus.NOT_CONFIGURED
    return CheckStatus.HEALTHY, notion


def _check_env(*names: str) -> CheckStatus:
    if any(os.environ.get(name) for name in names):
        return CheckStatus.CONFIGURED
    return CheckStatus.NOT_CONFIGURED


@router.get(
    "",
    response_model=HealthResponse,
    summary="Check service health",
    description="Returns the health status of the API service and its dependencies.",
)
def health_check() -> HealthResponse:
    """Check if the API service is healthy.

    The service is degraded when the database is missing or failing, or
    when no Discord bot token is set.

    :returns: Health status response.
    """
    logger.debug("Health check requested")
    database, notion = _check_database()
    checks = HealthChecks(
        database=database,
        discord=_check_env("DISCORD_BOT_TOKEN"),
        notion=notion,
        llm=_check_env("AWS_ACCESS_KEY_ID", "AWS_PROFILE"),
    )

    degraded = checks.database != CheckStatus.HEALTHY or checks.discord != CheckStatus.CONFIGURED
    return HealthResponse(
        status="degraded" if degraded else "healthy",
        version=VERSION,
        timestamp=datetime.now(UTC),
        environment=os.environ.get("APP_ENV", "local"),
        checks=checks,
    )
