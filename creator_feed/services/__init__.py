"""Cache service and data access collaborators."""

from creator_feed.services.base import (
    BlockListProvider,
    BookingHistoryProvider,
    EngagementProvider,
    ListingProvider,
    MediaRepository,
    NullBlockListProvider,
    ProfileRepository,
)
from creator_feed.services.cache import CacheService
from creator_feed.services.repositories import (
    SqlBookingHistoryProvider,
    SqlCreatorRepository,
    SqlEngagementProvider,
    SqlListingProvider,
)

__all__ = [
    "BlockListProvider",
    "BookingHistoryProvider",
    "EngagementProvider",
    "ListingProvider",
    "MediaRepository",
    "NullBlockListProvider",
    "ProfileRepository",
    "CacheService",
    "SqlBookingHistoryProvider",
    "SqlCreatorRepository",
    "SqlEngagementProvider",
    "SqlListingProvider",
]
