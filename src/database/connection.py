"""Engine and session handling for the guild settings database."""

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

DEFAULT_DATABASE_NAME = "notion_task_bot"
DEFAULT_DATABASE_USER = "app"


class DatabaseSettings(BaseSettings):
    """Connection settings read from the process environment.

    DATABASE_URL wins when set so local runs can point at any SQLAlchemy
    URL; otherwise a PostgreSQL URL is assembled from the parts.
    """

    model_config = SettingsConfigDict(extra="ignore")

    database_url: str | None = None
    database_host: str | None = None
    database_port: int = 5432
    database_name: str = DEFAULT_DATABASE_NAME
    app_db_password: str | None = Field(default=None, repr=False)
    database_echo: bool = False

    @property
    def is_configured(self) -> bool:
        """Whether a URL can be built."""
        return bool(self.database_url or (self.database_host and self.app_db_password))

    def url(self) -> str:
        """Build the connection URL.

        :returns: A SQLAlchemy URL.
        :raises KeyError: If neither DATABASE_URL nor host and password are set.
        """
        if self.database_url:
            return self.database_url
        if not self.is_configured:
            raise KeyError("DATABASE_URL or DATABASE_HOST and APP_DB_PASSWORD must be set")
        return (
            f"postgresql+psycopg2://{DEFAULT_DATABASE_USER}:{self.app_db_password}"
            f"@{self.database_host}:{self.database_port}/{self.database_name}"
        )


def get_database_url() -> str:
    """Build the database URL from the current environment.

    :returns: The database connection URL.
    :raises KeyError: If required environment variables are not set.
    """
    return DatabaseSettings().url()


def is_database_configured() -> bool:
    """Check whether enough environment is set to reach the database."""
    return DatabaseSettings().is_configured


def create_db_engine() -> Engine:
    """Create an engine from the current environment.

    SQL echo follows DATABASE_ECHO.

    :returns: A SQLAlchemy engine with pre-ping enabled.
    """
    settings = DatabaseSettings()
    return create_engine(settings.url(), echo=settings.database_echo, pool_pre_ping=True)


@dataclass
class _EngineCache:
    engine: Engine | None = field(default=None)
    session_factory: sessionmaker[Session] | None = field(default=None)


_cache = _EngineCache()


def get_session_factory() -> sessionmaker[Session]:
    """Get the process-wide session factory, creating the engine on first use.

    :returns: A sessionmaker bound to the shared engine.
    """
    if _cache.session_factory is None:
        _cache.engine = create_db_engine()
        _cache.session_factory = sessionmaker(bind=_cache.engine, expire_on_commit=False)
    return _cache.session_factory


@contextmanager
def get_session() -> Iterator[Session]:
    """Open a session that commits on success and rolls back on error.

    :yields: A database session.
    """
    session = get_session_factory()()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
