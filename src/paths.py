"""Centralised path constants for the application."""

from pathlib import Path

# Project root is 2 levels up from this file (src/paths.py -> project root)
PROJECT_ROOT = Path(__file__).resolve().parent.parent

# Shared by the API, the bot and Alembic
ENV_FILE = PROJECT_ROOT / ".env"
