"""Request-scoped sessions on the marketplace engine."""

from collections.abc import AsyncGenerator
from functools import lru_cache

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from creator_feed.db.base import get_engine


@lru_cache
def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the marketplace engine, built on first use."""
    return async_sessionmaker(bind=get_engine(), expire_on_commit=False, autoflush=False)


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """Yield a session that is closed when the request finishes."""
    async with get_session_factory()() as session:
        yield session
