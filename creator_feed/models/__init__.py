"""Pydantic models for read data, filters and responses."""

from creator_feed.models.creator import (
    BookingStatus,
    CreatorProfile,
    EngagementCounts,
    FeaturedListing,
    MediaAsset,
    MediaPurpose,
    MediaType,
    UserSummary,
)
from creator_feed.models.feed import (
    CardListing,
    CardMedia,
    CardProfile,
    CardUser,
    CreatorCard,
    FeedFilters,
    FeedPage,
)
from creator_feed.models.responses import HealthResponse

__all__ = [
    "BookingStatus",
    "CreatorProfile",
    "EngagementCounts",
    "FeaturedListing",
    "MediaAsset",
    "MediaPurpose",
    "MediaType",
    "UserSummary",
    "CardListing",
    "CardMedia",
    "CardProfile",
    "CardUser",
    "CreatorCard",
    "FeedFilters",
    "FeedPage",
    "HealthResponse",
]
