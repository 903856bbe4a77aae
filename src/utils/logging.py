"""Stdout logging shared by the API and the Discord bot."""

import logging
import os
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Libraries that install their own handlers; routed through root instead
_HANDLER_OWNING_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access", "discord")

# Floor level per chatty library logger
_LIBRARY_FLOORS = {
    "urllib3": logging.INFO,
    "httpx": logging.INFO,
    "botocore": logging.INFO,
    "discord.gateway": logging.WARNING,
    "discord.http": logging.WARNING,
}


def _parse_level(level: str) -> int:
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {level}")
    return numeric_level


def configure_logging() -> None:
    """Send all logging to a single stdout handler.

    Env vars:
      - LOG_LEVEL: DEBUG/INFO/WARNING/ERROR/CRITICAL (default INFO)
      - LOG_UVICORN_ACCESS: true/false (default false)

    :raises ValueError: If LOG_LEVEL is not a logging level name.
    """
    level_name = os.environ.get("LOG_LEVEL", "INFO")
    level = _parse_level(level_name)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    for name in _HANDLER_OWNING_LOGGERS:
        lib_logger = logging.getLogger(name)
        lib_logger.handlers.clear()
        lib_logger.propagate = True

    for name, floor in _LIBRARY_FLOORS.items():
        logging.getLogger(name).setLevel(max(level, floor))

    if os.environ.get("LOG_UVICORN_ACCESS", "false").strip().lower() != "true":
        logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    logging.getLogger(__name__).info("Logging configured: level=%s", level_name.upper())
