"""FastAPI dependency injection."""

from collections.abc import AsyncGenerator
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from creator_feed.config.settings import Settings, get_settings
from creator_feed.db.session import get_async_session
from creator_feed.pipelines.feed import CreatorFeedPipeline
from creator_feed.services.base import NullBlockListProvider
from creator_feed.services.cache import CacheService
from creator_feed.services.repositories import (
    SqlBookingHistoryProvider,
    SqlCreatorRepository,
    SqlEngagementProvider,
    SqlListingProvider,
)
from creator_feed.utils.exceptions import APIError


@lru_cache
def get_cache_service() -> CacheService:
    """Get cached CacheService instance."""
    settings = get_settings()
    return CacheService(
        redis_url=settings.redis_url,
        password=settings.redis_password.get_secret_value() if settings.redis_password else None,
        default_ttl=settings.feed_cache_ttl_seconds,
        enabled=settings.cache_enabled,
    )


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Get async database session."""
    async for session in get_async_session():
        yield session


async def get_viewer_id(
    x_viewer_id: Annotated[str | None, Header()] = None,
) -> str:
    """Viewer identity forwarded by the authenticating gateway."""
    viewer_id = (x_viewer_id or "").strip()
    if not viewer_id:
        raise APIError(
            "Authentication required to get personalized feed",
            status_code=401,
            error_code="unauthorized",
        )
    return viewer_id


# Type aliases for dependency injection
SettingsDep = Annotated[Settings, Depends(get_settings)]
CacheDep = Annotated[CacheService, Depends(get_cache_service)]
DbSessionDep = Annotated[AsyncSession, Depends(get_db_session)]
ViewerDep = Annotated[str, Depends(get_viewer_id)]


def get_feed_pipeline(
    settings: SettingsDep,
    cache: CacheDep,
    session: DbSessionDep,
) -> CreatorFeedPipeline:
    """Build feed pipeline with request-scoped repositories."""
    creators = SqlCreatorRepository(session)
    return CreatorFeedPipeline(
        settings=settings,
        cache=cache,
        media_repository=creators,
        profile_repository=creators,
        booking_history=SqlBookingHistoryProvider(session),
        block_list=NullBlockListProvider(),
        engagement=SqlEngagementProvider(session),
        listings=SqlListingProvider(session),
    )


FeedPipelineDep = Annotated[CreatorFeedPipeline, Depends(get_feed_pipeline)]
