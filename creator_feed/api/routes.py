"""API route definitions."""

from typing import Any

from fastapi import APIRouter, Request
from sqlalchemy import text

from creator_feed import __version__
from creator_feed.api.dependencies import CacheDep, DbSessionDep, FeedPipelineDep, ViewerDep
from creator_feed.models.feed import FeedPage
from creator_feed.models.responses import ErrorResponse, HealthResponse
from creator_feed.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()

# Filters that accept several values
LIST_PARAMS = ("specialties", "gear", "interests")


@router.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check(cache: CacheDep, session: DbSessionDep) -> HealthResponse:
    """Check system health and service availability."""
    services = {}

    try:
        await cache.ping()
        services["redis"] = True
    except Exception:
        services["redis"] = False

    try:
        await session.execute(text("SELECT 1"))
        services["database"] = True
    except Exception as e:
        logger.warning("database_ping_failed", error=str(e))
        services["database"] = False

    status = "healthy" if all(services.values()) else "degraded"

    return HealthResponse(status=status, version=__version__, services=services)


@router.get(
    "/api/feed",
    response_model=FeedPage,
    responses={401: {"model": ErrorResponse}},
    tags=["Feed"],
)
async def get_feed(
    request: Request,
    viewer_id: ViewerDep,
    pipeline: FeedPipelineDep,
) -> FeedPage:
    """Get the ranked creator feed for the current viewer.

    Query parameters: page, limit, city, specialties, gear, interests,
    maxMedia, minTravelRadiusKm. List filters are comma separated or
    repeated (``?gear=a&gear=b``). Malformed values fall back to defaults
    instead of being rejected.
    """
    raw_filters: dict[str, Any] = dict(request.query_params)
    for key in LIST_PARAMS:
        values = request.query_params.getlist(key)
        if len(values) > 1:
            raw_filters[key] = values

    logger.info("feed_request", viewer_id=viewer_id, filters=raw_filters)
    return await pipeline.execute(viewer_id, raw_filters)
