"""Collaborator interfaces consumed by the feed pipeline."""

from collections.abc import Sequence
from typing import Protocol

from creator_feed.models.creator import (
    CreatorProfile,
    EngagementCounts,
    FeaturedListing,
    MediaAsset,
)
from creator_feed.models.feed import FeedFilters


class MediaRepository(Protocol):
    """Source of creator-feed media assets."""

    async def query_feed_media(
        self, filters: FeedFilters, max_results: int
    ) -> list[MediaAsset]:
        """Return CREATOR_FEED media, newest first, at most max_results."""
        ...


class ProfileRepository(Protocol):
    """Source of creator profiles."""

    async def list_creator_profiles(self, filters: FeedFilters) -> list[CreatorProfile]: ...


class BlockListProvider(Protocol):
    """Creators a viewer has blocked."""

    async def get_blocked_creator_ids(self, viewer_id: str) -> set[str]: ...


class BookingHistoryProvider(Protocol):
    """Creators a viewer has completed bookings with."""

    async def get_completed_booking_creator_ids(self, viewer_id: str) -> set[str]: ...


class EngagementProvider(Protocol):
    """Like and comment counts per creator."""

    async def get_counts(self, creator_ids: Sequence[str]) -> dict[str, EngagementCounts]: ...


class ListingProvider(Protocol):
    """Featured service offering per creator."""

    async def get_featured(self, creator_ids: Sequence[str]) -> dict[str, FeaturedListing]: ...


class NullBlockListProvider:
    """Block list that never blocks anyone."""

    async def get_blocked_creator_ids(self, viewer_id: str) -> set[str]:
        return set()
