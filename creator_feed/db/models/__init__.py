"""ORM models for the marketplace tables read by the feed."""

from creator_feed.db.models.marketplace import (
    BookingRecord,
    CommentRecord,
    CreatorProfileRecord,
    LikeRecord,
    MediaAssetRecord,
    ServiceOfferingRecord,
    UserRecord,
)

__all__ = [
    "BookingRecord",
    "CommentRecord",
    "CreatorProfileRecord",
    "LikeRecord",
    "MediaAssetRecord",
    "ServiceOfferingRecord",
    "UserRecord",
]
