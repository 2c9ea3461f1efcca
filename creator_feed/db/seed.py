"""Seed demo creators for local development."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

from sqlalchemy import func, select

from creator_feed.db.models.marketplace import (
    CreatorProfileRecord,
    MediaAssetRecord,
    ServiceOfferingRecord,
    UserRecord,
)
from creator_feed.db.session import get_session_factory
from creator_feed.models.creator import MediaPurpose
from creator_feed.utils.logging import get_logger

logger = get_logger(__name__)

DEMO_CREATORS = [
    {
        "username": "lea.boxing",
        "full_name": "Lea Martin",
        "city": "Paris",
        "specialties": ["boxing", "fitness"],
        "gear": ["Sony A7 IV", "DJI Ronin"],
        "rating": "4.80",
        "ratings_count": 24,
        "radius": 30,
        "active_hours_ago": 2,
    },
    {
        "username": "omar.surf",
        "full_name": "Omar Benali",
        "city": "Biarritz",
        "specialties": ["surf", "yoga"],
        "gear": ["GoPro Hero 12", "DJI Mini 4"],
        "rating": "4.50",
        "ratings_count": 11,
        "radius": 80,
        "active_hours_ago": 20,
    },
    {
        "username": "ines.run",
        "full_name": "Ines Dubois",
        "city": "Lyon",
        "specialties": ["running", "trail"],
        "gear": ["Canon R6"],
        "rating": None,
        "ratings_count": 0,
        "radius": 50,
        "active_hours_ago": 96,
    },
]


async def seed_demo_creators() -> int:
    """Insert demo creators when the users table is empty.

    Returns:
        Number of creators created
    """
    async with get_session_factory()() as session:
        existing = await session.scalar(select(func.count(UserRecord.id)))
        if existing:
            logger.debug("demo_seed_skipped", users=existing)
            return 0

        now = datetime.now(timezone.utc)
        for index, data in enumerate(DEMO_CREATORS):
            user = UserRecord(
                username=data["username"],
                full_name=data["full_name"],
                is_verified=index == 0,
                updated_at=now - timedelta(hours=data["active_hours_ago"]),
            )
            session.add(user)
            await session.flush()

            session.add(
                CreatorProfileRecord(
                    user_id=user.id,
                    display_name=data["full_name"],
                    base_city=data["city"],
                    bio=f"{data['specialties'][0].title()} shooter based in {data['city']}.",
                    travel_radius_km=data["radius"],
                    specialties=data["specialties"],
                    gear=data["gear"],
                    avg_rating=Decimal(data["rating"]) if data["rating"] else None,
                    ratings_count=data["ratings_count"],
                )
            )
            for shot in range(3):
                session.add(
                    MediaAssetRecord(
                        owner_id=user.id,
                        purpose=MediaPurpose.CREATOR_FEED.value,
                        type="IMAGE",
                        public_url=f"https://picsum.photos/seed/{user.username}-{shot}/1080/1350",
                        width=1080,
                        height=1350,
                        caption=f"{data['specialties'][0]} session #{shot + 1}",
                        created_at=now - timedelta(days=shot),
                    )
                )
            session.add(
                ServiceOfferingRecord(
                    creator_id=user.id,
                    title=f"{data['specialties'][0].title()} photo session",
                    price_cents=15000,
                    currency="EUR",
                    includes=["20 edited photos"],
                    kind="PHOTO",
                    featured=True,
                )
            )

        await session.commit()
        logger.info("demo_creators_seeded", count=len(DEMO_CREATORS))
        return len(DEMO_CREATORS)
