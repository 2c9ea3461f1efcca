"""Read models for the marketplace entities consumed by the feed."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class MediaType(str, Enum):
    """Type of media content."""

    IMAGE = "image"
    VIDEO = "video"


class MediaPurpose(str, Enum):
    """What an uploaded asset is used for."""

    AVATAR = "AVATAR"
    BOOKING_DELIVERABLE = "BOOKING_DELIVERABLE"
    CREATOR_FEED = "CREATOR_FEED"
    ATHLETE_FEED = "ATHLETE_FEED"
    MISC = "MISC"


class BookingStatus(str, Enum):
    """Lifecycle states of a booking."""

    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    DECLINED = "DECLINED"
    CANCELLED = "CANCELLED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    REFUNDED = "REFUNDED"


class UserSummary(BaseModel):
    """Public identity of the user owning a creator profile."""

    model_config = ConfigDict(frozen=True)

    id: str
    username: str | None = None
    full_name: str | None = None
    user_photo: str | None = None
    is_verified: bool = False


class CreatorProfile(BaseModel):
    """Creator profile as seen by the feed. Never mutated here."""

    model_config = ConfigDict(frozen=True)

    user: UserSummary
    display_name: str
    base_city: str | None = None
    bio: str | None = None
    avg_rating: str | None = Field(default=None, description="Decimal string, e.g. '4.80'")
    ratings_count: int = Field(default=0, ge=0)
    specialties: list[str] = Field(default_factory=list)
    gear: list[str] = Field(default_factory=list)
    travel_radius_km: int | None = Field(default=None, ge=0)
    last_active_at: datetime

    @property
    def user_id(self) -> str:
        return self.user.id


class MediaAsset(BaseModel):
    """Uploaded media asset."""

    model_config = ConfigDict(frozen=True)

    id: str
    owner_id: str
    type: MediaType = MediaType.IMAGE
    purpose: MediaPurpose = MediaPurpose.CREATOR_FEED
    public_url: str | None = None
    thumbnail_url: str | None = None
    caption: str | None = None
    width: int | None = Field(default=None, ge=0)
    height: int | None = Field(default=None, ge=0)
    aspect_ratio: float | None = Field(default=None, ge=0)
    created_at: datetime


class FeaturedListing(BaseModel):
    """A creator's featured service offering."""

    id: str
    title: str
    price_cents: int = Field(ge=0)
    currency: str = "EUR"
    includes: list[str] = Field(default_factory=list)
    kind: str | None = None


class EngagementCounts(BaseModel):
    """Likes and comments attributed to a creator."""

    likes: int = Field(default=0, ge=0)
    comments: int = Field(default=0, ge=0)
