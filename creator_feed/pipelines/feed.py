"""Creator feed pipeline orchestrator."""

import time
from collections.abc import Mapping, Sequence
from datetime import datetime, timezone
from typing import Any

from creator_feed.config.settings import Settings
from creator_feed.models.creator import (
    CreatorProfile,
    EngagementCounts,
    FeaturedListing,
    MediaAsset,
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
from creator_feed.ranking.pagination import ScoredItem, paginate, rank
from creator_feed.ranking.scorer import CreatorScorer
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
from creator_feed.utils.hashing import generate_cache_key
from creator_feed.utils.logging import get_logger

logger = get_logger(__name__)

CACHE_PREFIX = "creator_feed"


def group_media_by_creator(
    media: Sequence[MediaAsset],
    creator_ids: set[str],
    max_per_creator: int,
) -> dict[str, list[MediaAsset]]:
    """Bucket media by owner, keeping the first max_per_creator of each.

    Media is expected newest first, so each bucket holds the newest items.
    Owners without a creator profile are skipped.
    """
    grouped: dict[str, list[MediaAsset]] = {}
    for asset in media:
        if asset.owner_id not in creator_ids:
            continue
        bucket = grouped.setdefault(asset.owner_id, [])
        if len(bucket) < max_per_creator:
            bucket.append(asset)
    return grouped


class CreatorFeedPipeline:
    """Builds a ranked, paginated creator feed for a viewer.

    Coordinates the following steps:
    1. Filter sanitization
    2. Media and profile retrieval
    3. Block list exclusion
    4. Media grouping and booking history lookup
    5. Scoring, sorting and pagination
    6. Page caching
    """

    def __init__(
        self,
        settings: Settings,
        cache: CacheService,
        media_repository: MediaRepository,
        profile_repository: ProfileRepository,
        booking_history: BookingHistoryProvider,
        block_list: BlockListProvider | None = None,
        engagement: EngagementProvider | None = None,
        listings: ListingProvider | None = None,
        scorer: CreatorScorer | None = None,
    ):
        """Initialize the feed pipeline.

        Args:
            settings: Application settings
            cache: Cache service for assembled pages
            media_repository: Source of creator-feed media
            profile_repository: Source of creator profiles
            booking_history: Completed bookings of the viewer
            block_list: Blocked creators (defaults to an empty block list)
            engagement: Optional like/comment counts
            listings: Optional featured listings
            scorer: Scorer override; built from settings otherwise
        """
        self.settings = settings
        self.cache = cache
        self.media_repository = media_repository
        self.profile_repository = profile_repository
        self.booking_history = booking_history
        self.block_list = block_list or NullBlockListProvider()
        self.engagement = engagement
        self.listings = listings
        self.scorer = scorer or CreatorScorer(
            weights={
                "recency": settings.weight_recency,
                "rating": settings.weight_rating,
                "media_bonus": settings.media_bonus,
                "loyalty_boost": settings.loyalty_boost,
                "interest_cap": settings.interest_boost_cap,
            },
            half_life_hours=settings.feed_half_life_hours,
        )

    async def execute(self, viewer_id: str, raw_filters: Mapping[str, Any] | None) -> FeedPage:
        """Build the feed page for a viewer.

        Never raises: failures are logged and produce an empty page.

        Args:
            viewer_id: Requesting user
            raw_filters: Unsanitized filter map from the request

        Returns:
            Feed page
        """
        filters = FeedFilters.sanitize(raw_filters)

        try:
            page = await self._get_cached_or_build(viewer_id, filters)
        except Exception as e:
            logger.error(
                "creator_feed_failed",
                viewer_id=viewer_id,
                error=str(e),
                exc_info=True,
            )
            return FeedPage.empty(filters.page, filters.limit)

        logger.info("feed_built", viewer_id=viewer_id, total=page.total)
        return page

    def _get_cache_key(self, viewer_id: str, filters: FeedFilters) -> str:
        """Generate cache key for a viewer and filter set."""
        return generate_cache_key(CACHE_PREFIX, viewer_id, filters)

    async def _get_cached_or_build(self, viewer_id: str, filters: FeedFilters) -> FeedPage:
        """Serve from cache when possible, computing directly if the cache breaks."""
        built: FeedPage | None = None
        attempted = False

        async def compute() -> FeedPage:
            nonlocal built, attempted
            attempted = True
            built = await self.build(viewer_id, filters)
            return built

        try:
            return await self.cache.get_or_compute(
                self._get_cache_key(viewer_id, filters),
                compute,
                FeedPage,
                ttl=self.settings.feed_cache_ttl_seconds,
            )
        except Exception as e:
            if built is not None:
                logger.warning("feed_cache_write_failed", viewer_id=viewer_id, error=str(e))
                return built
            if attempted:
                raise
            logger.warning("feed_cache_unavailable", viewer_id=viewer_id, error=str(e))
            return await self.build(viewer_id, filters)

    async def build(self, viewer_id: str, filters: FeedFilters) -> FeedPage:
        """Compute the feed page without caching.

        Args:
            viewer_id: Requesting user
            filters: Sanitized filters

        Returns:
            Ranked feed page
        """
        start_time = time.perf_counter()
        now = datetime.now(timezone.utc)

        media = await self.media_repository.query_feed_media(
            filters, max_results=self.settings.feed_max_candidates
        )
        logger.debug("media_queried", count=len(media))

        profiles = [
            profile
            for profile in await self.profile_repository.list_creator_profiles(filters)
            if filters.matches(profile)
        ]
        logger.debug("profiles_queried", count=len(profiles))

        blocked = await self.block_list.get_blocked_creator_ids(viewer_id)
        profiles = [profile for profile in profiles if profile.user_id not in blocked]

        creator_ids = [profile.user_id for profile in profiles]
        media_by_creator = group_media_by_creator(media, set(creator_ids), filters.max_media)
        booked = await self.booking_history.get_completed_booking_creator_ids(viewer_id)

        scored = rank(
            [
                ScoredItem(
                    score=self.scorer.score(
                        profile,
                        now=now,
                        has_media=bool(media_by_creator.get(profile.user_id)),
                        interests=filters.interests,
                        booked_creator_ids=booked,
                    ),
                    item=profile,
                )
                for profile in profiles
            ]
        )

        page = paginate(scored, filters.page, filters.limit)
        page_ids = [entry.item.user_id for entry in page.items]
        engagement = await self._get_engagement(page_ids)
        listings = await self.listings.get_featured(page_ids) if self.listings else {}

        results = [
            self._to_card(
                entry.item,
                media_by_creator.get(entry.item.user_id, []),
                engagement.get(entry.item.user_id, EngagementCounts()),
                listings.get(entry.item.user_id),
            )
            for entry in page.items
        ]

        logger.debug(
            "feed_ranked",
            viewer_id=viewer_id,
            candidates=len(profiles),
            returned=len(results),
            duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
        )

        return FeedPage(
            page=filters.page,
            limit=filters.limit,
            total=page.total,
            next_page=page.next_page,
            results=results,
        )

    async def _get_engagement(self, creator_ids: list[str]) -> dict[str, EngagementCounts]:
        """Fetch like/comment counts; zeros when the lookup fails."""
        if not self.engagement or not creator_ids:
            return {}
        try:
            return await self.engagement.get_counts(creator_ids)
        except Exception as e:
            logger.warning("engagement_counts_failed", error=str(e), creator_ids=creator_ids)
            return {}

    def _to_card(
        self,
        profile: CreatorProfile,
        media: list[MediaAsset],
        engagement: EngagementCounts,
        listing: FeaturedListing | None,
    ) -> CreatorCard:
        return CreatorCard(
            creator_profile=CardProfile(
                display_name=profile.display_name,
                city=profile.base_city,
                bio=profile.bio,
                rating=profile.avg_rating,
                ratings_count=profile.ratings_count,
                specialties=profile.specialties,
                medias=[CardMedia.from_asset(asset) for asset in media],
                likes_count=engagement.likes,
                comments_count=engagement.comments,
                user=CardUser.from_summary(profile.user),
                listing=CardListing.from_listing(listing) if listing else None,
            )
        )
