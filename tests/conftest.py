"""Pytest fixtures for testing."""

import os

# Point the app at an in-memory database before any creator_feed imports;
# creator_feed/db/session.py builds its engine at module level.
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("CACHE_ENABLED", "false")

import random
from collections.abc import Sequence
from unittest.mock import AsyncMock, MagicMock

import pytest

from creator_feed.config.settings import Settings
from creator_feed.models.creator import CreatorProfile, MediaAsset
from creator_feed.pipelines.feed import CreatorFeedPipeline
from creator_feed.ranking.scorer import CreatorScorer
from creator_feed.services.cache import CacheService
from tests.factories import FakeBlockList, FakeBookingHistory, FakeCreatorRepository


@pytest.fixture
def mock_settings():
    """Create settings for testing."""
    return Settings(
        redis_url="redis://localhost:6379/0",
        database_url="sqlite:///:memory:",
        cache_enabled=False,
        debug=True,
    )


@pytest.fixture
def mock_cache():
    """Create mock cache service that always computes."""
    cache = MagicMock(spec=CacheService)

    async def passthrough(key, factory, model_class, ttl=None):
        return await factory()

    cache.get_or_compute = AsyncMock(side_effect=passthrough)
    cache.ping = AsyncMock(return_value=True)
    cache.close = AsyncMock()
    cache.enabled = False
    return cache


@pytest.fixture
def quiet_scorer():
    """Scorer whose jitter is always zero."""
    rng = MagicMock(spec=random.Random)
    rng.randint.return_value = 0
    return CreatorScorer(rng=rng)


@pytest.fixture
def build_pipeline(mock_settings, mock_cache, quiet_scorer):
    """Factory for pipelines backed by in-memory collaborators."""

    def _build(
        profiles: Sequence[CreatorProfile] = (),
        media: Sequence[MediaAsset] = (),
        booked: set[str] | None = None,
        blocked: set[str] | None = None,
        engagement=None,
        listings=None,
        cache=None,
    ) -> CreatorFeedPipeline:
        repo = FakeCreatorRepository(profiles, media)
        return CreatorFeedPipeline(
            settings=mock_settings,
            cache=cache or mock_cache,
            media_repository=repo,
            profile_repository=repo,
            booking_history=FakeBookingHistory(booked),
            block_list=FakeBlockList(blocked),
            engagement=engagement,
            listings=listings,
            scorer=quiet_scorer,
        )

    return _build
