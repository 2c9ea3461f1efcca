"""Async engine for the marketplace database and the declarative base."""

from functools import lru_cache

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from creator_feed.config.settings import get_settings
from creator_feed.utils.exceptions import RepositoryError
from creator_feed.utils.logging import get_logger

logger = get_logger(__name__)


class Base(DeclarativeBase):
    """Declarative base for the marketplace tables."""


def async_database_url(url: str) -> str:
    """Route plain sqlite URLs through the aiosqlite driver."""
    if url.startswith("sqlite://"):
        return url.replace("sqlite://", "sqlite+aiosqlite://", 1)
    return url


@lru_cache
def get_engine() -> AsyncEngine:
    """Get the process-wide engine for the configured marketplace database."""
    settings = get_settings()
    return create_async_engine(
        async_database_url(settings.database_url),
        echo=settings.debug,
        pool_pre_ping=True,
    )


async def init_db(create_schema: bool = False, engine: AsyncEngine | None = None) -> None:
    """Check that the marketplace database answers queries.

    The tables belong to the profile, upload and booking subsystems, so the
    feed only creates them when asked to (local development, demo data).

    Args:
        create_schema: Create missing marketplace tables
        engine: Engine to use instead of the configured one

    Raises:
        RepositoryError: If the database cannot be reached
    """
    engine = engine or get_engine()

    try:
        async with engine.begin() as conn:
            if create_schema:
                from creator_feed.db.models import marketplace  # noqa: F401

                await conn.run_sync(Base.metadata.create_all)
                logger.info("database_schema_created")
            else:
                await conn.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        raise RepositoryError(f"Database unavailable: {e}", source="database")


async def close_db() -> None:
    """Dispose of pooled connections."""
    await get_engine().dispose()
