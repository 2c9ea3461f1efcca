"""Feed filter and response models."""

from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from creator_feed.models.creator import CreatorProfile, FeaturedListing, MediaAsset, UserSummary

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 20
MAX_LIMIT = 50
DEFAULT_MAX_MEDIA = 4
MAX_MEDIA = 10


def _to_int(value: Any, default: int) -> int:
    """Coerce a raw filter value to int, falling back to default."""
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    try:
        return int(float(str(value).strip()))
    except (TypeError, ValueError, OverflowError):
        return default


def _to_list(value: Any) -> list[str]:
    """Split comma-separated strings (or an iterable of them) into trimmed values.

    Missing and blank entries are dropped.
    """
    if value is None:
        return []
    if isinstance(value, str) or not isinstance(value, Iterable):
        value = [value]

    values: list[str] = []
    for part in value:
        if part is None:
            continue
        values.extend(piece.strip() for piece in str(part).split(","))
    return [piece for piece in values if piece]


def _clamp(value: int, low: int, high: int | None = None) -> int:
    value = max(low, value)
    if high is not None:
        value = min(high, value)
    return value


class FeedFilters(BaseModel):
    """Sanitized feed filter criteria.

    Build instances through ``FeedFilters.sanitize`` so raw request values
    are coerced and clamped; direct construction still validates ranges.
    """

    model_config = ConfigDict(frozen=True)

    city: str = ""
    specialties: list[str] = Field(default_factory=list)
    gear: list[str] = Field(default_factory=list)
    min_travel_radius_km: int = Field(default=0, ge=0)
    interests: list[str] = Field(default_factory=list)
    page: int = Field(default=DEFAULT_PAGE, ge=1)
    limit: int = Field(default=DEFAULT_LIMIT, ge=1, le=MAX_LIMIT)
    max_media: int = Field(default=DEFAULT_MAX_MEDIA, ge=1, le=MAX_MEDIA)

    @classmethod
    def sanitize(cls, raw: Mapping[str, Any] | None) -> "FeedFilters":
        """Coerce a loosely-typed filter map into safe values. Never raises."""
        raw = raw or {}

        def pick(*keys: str) -> Any:
            for key in keys:
                if key in raw:
                    return raw[key]
            return None

        city = pick("city")
        return cls(
            city=str(city).strip() if city is not None else "",
            specialties=_to_list(pick("specialties")),
            gear=_to_list(pick("gear")),
            min_travel_radius_km=_clamp(
                _to_int(pick("minTravelRadiusKm", "min_travel_radius_km"), 0), 0
            ),
            interests=_to_list(pick("interests")),
            page=_clamp(_to_int(pick("page"), DEFAULT_PAGE), 1),
            limit=_clamp(_to_int(pick("limit"), DEFAULT_LIMIT), 1, MAX_LIMIT),
            max_media=_clamp(
                _to_int(pick("maxMedia", "max_media"), DEFAULT_MAX_MEDIA), 1, MAX_MEDIA
            ),
        )

    def matches(self, profile: CreatorProfile) -> bool:
        """Check a profile against city, specialty, gear and radius predicates."""
        if self.city and (profile.base_city or "").lower() != self.city.lower():
            return False
        if self.specialties and not _overlaps(self.specialties, profile.specialties):
            return False
        if self.gear and not _overlaps(self.gear, profile.gear):
            return False
        if self.min_travel_radius_km > 0:
            if (profile.travel_radius_km or 0) < self.min_travel_radius_km:
                return False
        return True


def _overlaps(wanted: list[str], available: list[str]) -> bool:
    available_lower = {value.lower() for value in available}
    return any(value.lower() in available_lower for value in wanted)


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CardUser(_CamelModel):
    """User block of a creator card."""

    id: str
    username: str | None = None
    full_name: str | None = None
    user_photo: str | None = None
    is_verified: bool = False

    @classmethod
    def from_summary(cls, user: UserSummary) -> "CardUser":
        return cls(**user.model_dump())


class CardMedia(_CamelModel):
    """Media item shown on a creator card."""

    id: str
    type: str
    url: str = ""
    thumbnail_url: str | None = None
    caption: str | None = None
    aspect_ratio: float | None = None
    width: int | None = None
    height: int | None = None
    created_at: str | None = None

    @classmethod
    def from_asset(cls, asset: MediaAsset) -> "CardMedia":
        return cls(
            id=asset.id,
            type=asset.type.value.lower(),
            url=asset.public_url or "",
            thumbnail_url=asset.thumbnail_url,
            caption=asset.caption,
            aspect_ratio=asset.aspect_ratio,
            width=asset.width,
            height=asset.height,
            created_at=asset.created_at.isoformat() if asset.created_at else None,
        )


class CardListing(_CamelModel):
    """Featured listing block of a creator card."""

    id: str
    title: str
    price: int
    currency: str
    includes: list[str] = Field(default_factory=list)
    kind: str | None = None

    @classmethod
    def from_listing(cls, listing: FeaturedListing) -> "CardListing":
        return cls(
            id=listing.id,
            title=listing.title,
            price=listing.price_cents,
            currency=listing.currency,
            includes=listing.includes,
            kind=listing.kind,
        )


class CardProfile(_CamelModel):
    """Profile summary rendered in the feed."""

    display_name: str
    city: str | None = None
    bio: str | None = None
    rating: str | None = None
    ratings_count: int = 0
    specialties: list[str] = Field(default_factory=list)
    medias: list[CardMedia] = Field(default_factory=list)
    likes_count: int = 0
    comments_count: int = 0
    user: CardUser
    listing: CardListing | None = None


class CreatorCard(_CamelModel):
    """One entry of the creator feed."""

    creator_profile: CardProfile

    @property
    def creator_id(self) -> str:
        return self.creator_profile.user.id


class FeedPage(_CamelModel):
    """A page of ranked creator cards."""

    page: int = Field(..., ge=1)
    limit: int = Field(..., ge=1)
    total: int = Field(..., ge=0)
    next_page: int | None = None
    results: list[CreatorCard] = Field(default_factory=list)

    @classmethod
    def empty(cls, page: int, limit: int) -> "FeedPage":
        return cls(page=page, limit=limit, total=0, next_page=None, results=[])

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "page": 1,
                "limit": 20,
                "total": 1,
                "nextPage": None,
                "results": [
                    {
                        "creatorProfile": {
                            "displayName": "Lea Martin",
                            "city": "Paris",
                            "rating": "4.80",
                            "ratingsCount": 12,
                            "specialties": ["boxing"],
                            "medias": [],
                            "likesCount": 3,
                            "commentsCount": 1,
                            "user": {"id": "42", "username": "lea", "isVerified": True},
                            "listing": None,
                        }
                    }
                ],
            }
        },
    )
