"""Creator scoring algorithm for ranking the feed."""

import random
from collections.abc import Collection, Sequence
from datetime import datetime, timezone

from creator_feed.models.creator import CreatorProfile
from creator_feed.utils.logging import get_logger

logger = get_logger(__name__)

HALF_LIFE_HOURS = 48
NEUTRAL_RATING = 0.4
MAX_JITTER_MILLIS = 6

# Default ranking weights
DEFAULT_WEIGHTS = {
    "recency": 0.45,
    "rating": 0.30,
    "media_bonus": 0.15,
    "loyalty_boost": 0.10,
    "interest_cap": 0.10,
}


class CreatorScorer:
    """Scores creator profiles by activity, rating, media, interests and loyalty.

    The final score is

        weights.recency * recency + weights.rating * rating
        + media_bonus + interest_boost + loyalty_boost + jitter

    Recency and rating are in [0, 1]; the bonuses are flat additions.
    """

    def __init__(
        self,
        weights: dict[str, float] | None = None,
        half_life_hours: int = HALF_LIFE_HOURS,
        rng: random.Random | None = None,
    ):
        """Initialize scorer.

        Args:
            weights: Overrides for any of the DEFAULT_WEIGHTS entries
            half_life_hours: Hours after which the recency term halves
            rng: Random source for jitter (unseeded by default)
        """
        self.weights = {**DEFAULT_WEIGHTS, **(weights or {})}
        self.half_life_hours = half_life_hours
        self.rng = rng or random.Random()

    def score(
        self,
        profile: CreatorProfile,
        *,
        now: datetime,
        has_media: bool,
        interests: Sequence[str],
        booked_creator_ids: Collection[str],
    ) -> float:
        """Compute the composite relevance score for one creator."""
        recency = self.half_life_score(profile.last_active_at, now, self.half_life_hours)
        rating = self.normalize_rating(profile.avg_rating)

        return (
            self.weights["recency"] * recency
            + self.weights["rating"] * rating
            + self.media_bonus(has_media)
            + self.interest_boost(interests, profile.specialties)
            + self.loyalty_boost(profile.user_id, booked_creator_ids)
            + self.jitter()
        )

    @staticmethod
    def half_life_score(last_active: datetime, now: datetime, half_life_hours: int) -> float:
        """Exponential decay: 1.0 when active now, 0.5 after one half-life."""
        diff_hours = max(0.0, (_aware(now) - _aware(last_active)).total_seconds() / 3600)
        return 0.5 ** (diff_hours / max(1, half_life_hours))

    @staticmethod
    def normalize_rating(avg_rating: str | float | None) -> float:
        """Map a 0-5 average rating into [0, 1]; unrated creators get a neutral score."""
        if avg_rating is None:
            return NEUTRAL_RATING
        try:
            value = float(avg_rating)
        except (TypeError, ValueError):
            logger.debug("rating_unparsable", avg_rating=avg_rating)
            return NEUTRAL_RATING
        return max(0.0, min(1.0, value / 5.0))

    def media_bonus(self, has_media: bool) -> float:
        return self.weights["media_bonus"] if has_media else 0.0

    def interest_boost(self, interests: Sequence[str], specialties: Sequence[str]) -> float:
        """Boost creators whose specialties overlap the viewer's interests."""
        if not interests or not specialties:
            return 0.0

        wanted = {interest.lower() for interest in interests}
        offered = {specialty.lower() for specialty in specialties}
        overlap = len(wanted & offered)

        return min(self.weights["interest_cap"], 0.03 + 0.02 * overlap)

    def loyalty_boost(self, creator_id: str, booked_creator_ids: Collection[str]) -> float:
        return self.weights["loyalty_boost"] if creator_id in booked_creator_ids else 0.0

    def jitter(self) -> float:
        """Small random tie-breaker in [0, 0.006]."""
        return self.rng.randint(0, MAX_JITTER_MILLIS) / 1000.0


def _aware(value: datetime) -> datetime:
    """Treat naive datetimes as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
