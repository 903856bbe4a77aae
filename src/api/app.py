"""FastAPI application for guild settings and Notion task management."""

import logging
import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import APIRouter, Depends, FastAPI

from src.api.bot.endpoints import router as bot_router
from src.api.guilds.endpoints import router as guilds_router
from src.api.health.endpoints import VERSION
from src.api.health.endpoints import router as health_router
from src.api.models import ErrorResponse
from src.api.notion.router import router as notion_router
from src.api.security import verify_token
from src.database.connection import is_database_configured
from src.observability.sentry import init_sentry
from src.utils.logging import configure_logging

configure_logging()
init_sentry("api")

logger = logging.getLogger(__name__)

# Everything except health requires the bearer token
PROTECTED_ROUTERS: tuple[APIRouter, ...] = (bot_router, guilds_router, notion_router)


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    """Log startup state so a missing database shows up immediately."""
    if not is_database_configured():
        logger.warning("Database is not configured; guild settings routes will fail")
    logger.info(f"Notion Task Bot API starting: version={VERSION}")
    yield
    logger.info("Notion Task Bot API stopped")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    :returns: Configured FastAPI application instance.
    """
    application = FastAPI(
        title="Notion Task Bot API",
        version=VERSION,
        lifespan=lifespan,
        responses={
            401: {"model": ErrorResponse, "description": "Missing or invalid bearer token"},
            500: {"model": ErrorResponse, "description": "Internal server error"},
        },
    )

    application.include_router(health_router)
    for router in PROTECTED_ROUTERS:
        application.include_router(router, dependencies=[Depends(verify_token)])

    return application


app = create_app()


def run() -> None:
    """Serve the API with uvicorn on API_HOST and API_PORT."""
    uvicorn.run(
        "src.api.app:app",
        host=os.environ.get("API_HOST", "0.0.0.0"),
        port=int(os.environ.get("API_PORT", "8000")),
        log_config=None,
    )
