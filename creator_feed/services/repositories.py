"""SQL-backed repositories and providers for the creator feed."""

import json
from collections.abc import Sequence
from typing import Any

from sqlalchemy import String, cast, func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from creator_feed.db.models.marketplace import (
    BookingRecord,
    CommentRecord,
    CreatorProfileRecord,
    LikeRecord,
    MediaAssetRecord,
    ServiceOfferingRecord,
    UserRecord,
)
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
from creator_feed.models.feed import FeedFilters
from creator_feed.utils.exceptions import RepositoryError
from creator_feed.utils.logging import get_logger

logger = get_logger(__name__)


def apply_profile_filters(stmt: Any, filters: FeedFilters) -> Any:
    """Push city, specialty, gear and radius predicates onto a profile query.

    Specialty and gear membership is a substring match of the JSON-encoded
    value against the serialized list column.
    """
    if filters.city:
        stmt = stmt.where(func.lower(CreatorProfileRecord.base_city) == filters.city.lower())

    if filters.specialties:
        stmt = stmt.where(_json_contains_any(CreatorProfileRecord.specialties, filters.specialties))

    if filters.gear:
        stmt = stmt.where(_json_contains_any(CreatorProfileRecord.gear, filters.gear))

    if filters.min_travel_radius_km > 0:
        stmt = stmt.where(CreatorProfileRecord.travel_radius_km >= filters.min_travel_radius_km)

    return stmt


def _json_contains_any(column: Any, values: Sequence[str]) -> Any:
    serialized = cast(column, String)
    return or_(*(serialized.contains(json.dumps(value), autoescape=True) for value in values))


def _to_profile(profile: CreatorProfileRecord, user: UserRecord) -> CreatorProfile:
    return CreatorProfile(
        user=UserSummary(
            id=user.id,
            username=user.username,
            full_name=user.full_name,
            user_photo=user.user_photo,
            is_verified=user.is_verified,
        ),
        display_name=profile.display_name,
        base_city=profile.base_city,
        bio=profile.bio,
        avg_rating=str(profile.avg_rating) if profile.avg_rating is not None else None,
        ratings_count=profile.ratings_count or 0,
        specialties=list(profile.specialties or []),
        gear=list(profile.gear or []),
        travel_radius_km=profile.travel_radius_km,
        last_active_at=user.updated_at or profile.created_at,
    )


def _to_media(record: MediaAssetRecord) -> MediaAsset:
    return MediaAsset(
        id=record.id,
        owner_id=record.owner_id,
        type=MediaType(record.type.lower()),
        purpose=MediaPurpose(record.purpose),
        public_url=record.public_url,
        thumbnail_url=record.thumbnail_url,
        caption=record.caption,
        width=record.width,
        height=record.height,
        aspect_ratio=record.aspect_ratio,
        created_at=record.created_at,
    )


class SqlCreatorRepository:
    """Creator profiles and feed media from the marketplace database."""

    def __init__(self, session: AsyncSession):
        """Initialize repository.

        Args:
            session: Async database session
        """
        self.session = session

    async def query_feed_media(
        self, filters: FeedFilters, max_results: int
    ) -> list[MediaAsset]:
        """Fetch creator-feed media owned by creators matching the filters."""
        stmt = (
            select(MediaAssetRecord)
            .join(CreatorProfileRecord, CreatorProfileRecord.user_id == MediaAssetRecord.owner_id)
            .where(MediaAssetRecord.purpose == MediaPurpose.CREATOR_FEED.value)
            .order_by(MediaAssetRecord.created_at.desc())
            .limit(max_results)
        )
        stmt = apply_profile_filters(stmt, filters)

        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            raise RepositoryError(f"Media query failed: {e}", source="media_assets")

        return [_to_media(record) for record in result.scalars().all()]

    async def list_creator_profiles(self, filters: FeedFilters) -> list[CreatorProfile]:
        """Fetch creator profiles with the filter contract pushed down."""
        stmt = select(CreatorProfileRecord, UserRecord).join(
            UserRecord, UserRecord.id == CreatorProfileRecord.user_id
        )
        stmt = apply_profile_filters(stmt, filters)

        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            raise RepositoryError(f"Profile query failed: {e}", source="creator_profiles")

        return [_to_profile(profile, user) for profile, user in result.all()]


class SqlBookingHistoryProvider:
    """Completed bookings of a viewer."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_completed_booking_creator_ids(self, viewer_id: str) -> set[str]:
        stmt = (
            select(BookingRecord.creator_id)
            .where(BookingRecord.athlete_id == viewer_id)
            .where(BookingRecord.status == BookingStatus.COMPLETED.value)
            .distinct()
        )

        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            raise RepositoryError(f"Booking history query failed: {e}", source="bookings")

        return set(result.scalars().all())


class SqlEngagementProvider:
    """Likes and comments received by creators."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_counts(self, creator_ids: Sequence[str]) -> dict[str, EngagementCounts]:
        """Count likes and comments per creator; creators without any get zeros."""
        if not creator_ids:
            return {}

        likes_stmt = (
            select(LikeRecord.creator_id, func.count(LikeRecord.id))
            .where(LikeRecord.creator_id.in_(creator_ids))
            .group_by(LikeRecord.creator_id)
        )
        comments_stmt = (
            select(CommentRecord.creator_id, func.count(CommentRecord.id))
            .where(CommentRecord.creator_id.in_(creator_ids))
            .group_by(CommentRecord.creator_id)
        )

        try:
            likes = dict((await self.session.execute(likes_stmt)).all())
            comments = dict((await self.session.execute(comments_stmt)).all())
        except SQLAlchemyError as e:
            raise RepositoryError(f"Engagement query failed: {e}", source="likes/comments")

        return {
            creator_id: EngagementCounts(
                likes=likes.get(creator_id, 0),
                comments=comments.get(creator_id, 0),
            )
            for creator_id in creator_ids
        }


class SqlListingProvider:
    """Featured service offerings."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_featured(self, creator_ids: Sequence[str]) -> dict[str, FeaturedListing]:
        """Map creator id to its featured offering. If several are featured, the last wins."""
        if not creator_ids:
            return {}

        stmt = (
            select(ServiceOfferingRecord)
            .where(ServiceOfferingRecord.creator_id.in_(creator_ids))
            .where(ServiceOfferingRecord.featured.is_(True))
        )

        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            raise RepositoryError(f"Listing query failed: {e}", source="service_offerings")

        featured: dict[str, FeaturedListing] = {}
        for offering in result.scalars().all():
            featured[offering.creator_id] = FeaturedListing(
                id=str(offering.id),
                title=offering.title,
                price_cents=offering.price_cents,
                currency=offering.currency,
                includes=list(offering.includes or []),
                kind=offering.kind,
            )
        return featured
