"""Integration tests for the creator feed pipeline."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from creator_feed.models.creator import EngagementCounts, FeaturedListing
from creator_feed.models.feed import FeedFilters
from creator_feed.pipelines.feed import CreatorFeedPipeline, group_media_by_creator
from creator_feed.services.cache import CacheService
from tests.factories import (
    FakeBookingHistory,
    FakeCreatorRepository,
    FakeEngagement,
    FakeListings,
    make_media,
    make_profile,
)


def result_ids(page) -> list[str]:
    return [card.creator_id for card in page.results]


class TestGroupMedia:
    """Tests for media bucketing."""

    def test_caps_each_creator_and_keeps_newest(self):
        media = [make_media(f"m{i}", "a", hours_ago=i) for i in range(6)]

        grouped = group_media_by_creator(media, {"a"}, max_per_creator=4)

        assert [asset.id for asset in grouped["a"]] == ["m0", "m1", "m2", "m3"]

    def test_skips_owners_without_profile(self):
        grouped = group_media_by_creator([make_media("m1", "ghost")], {"a"}, 4)

        assert grouped == {}


class TestCreatorFeedPipeline:
    """Tests for CreatorFeedPipeline."""

    @pytest.mark.asyncio
    async def test_end_to_end_example(self, build_pipeline):
        """Two Paris creators ranked by activity and rating; other cities excluded."""
        creator_a = make_profile("A", city="Paris", rating="4.8", specialties=["Boxing"], hours_ago=1)
        creator_b = make_profile("B", city="Paris", rating="3.0", specialties=["surf"], hours_ago=72)
        others = [make_profile(f"x{i}", city="Lyon", rating="5.0", hours_ago=0) for i in range(10)]
        pipeline = build_pipeline(profiles=[creator_b, *others, creator_a])

        page = await pipeline.execute(
            "viewer", {"city": "Paris", "limit": 2, "page": 1, "interests": "boxing,yoga"}
        )

        assert result_ids(page) == ["A", "B"]
        assert page.total == 2
        assert page.next_page is None

    @pytest.mark.asyncio
    async def test_pagination_over_all_candidates(self, build_pipeline):
        profiles = [make_profile(f"c{i}", hours_ago=i * 10) for i in range(5)]
        pipeline = build_pipeline(profiles=profiles)

        first = await pipeline.execute("viewer", {"limit": 2})
        last = await pipeline.execute("viewer", {"limit": 2, "page": 3})

        assert first.total == 5
        assert first.next_page == 2
        assert result_ids(first) == ["c0", "c1"]
        assert result_ids(last) == ["c4"]
        assert last.next_page is None

    @pytest.mark.asyncio
    async def test_blocked_creators_never_appear(self, build_pipeline):
        star = make_profile("star", rating="5.0", hours_ago=0)
        other = make_profile("other", rating="1.0", hours_ago=100)
        pipeline = build_pipeline(profiles=[star, other], blocked={"star"})

        page = await pipeline.execute("viewer", {})

        assert result_ids(page) == ["other"]
        assert page.total == 1

    @pytest.mark.asyncio
    async def test_loyalty_boost_reorders(self, build_pipeline):
        a = make_profile("a", rating="4.0", hours_ago=1)
        b = make_profile("b", rating="4.0", hours_ago=1)
        pipeline = build_pipeline(profiles=[a, b], booked={"b"})

        page = await pipeline.execute("viewer", {})

        assert result_ids(page) == ["b", "a"]

    @pytest.mark.asyncio
    async def test_media_grouped_and_capped(self, build_pipeline):
        a = make_profile("a")
        b = make_profile("b")
        media = [make_media(f"a{i}", "a", hours_ago=i) for i in range(5)]
        pipeline = build_pipeline(profiles=[a, b], media=media)

        page = await pipeline.execute("viewer", {"maxMedia": "2"})

        cards = {card.creator_id: card for card in page.results}
        assert [m.id for m in cards["a"].creator_profile.medias] == ["a0", "a1"]
        assert cards["b"].creator_profile.medias == []
        # media bonus puts the creator with media first
        assert result_ids(page)[0] == "a"

    @pytest.mark.asyncio
    async def test_card_shape(self, build_pipeline):
        a = make_profile("a", specialties=["boxing"])
        pipeline = build_pipeline(
            profiles=[a],
            media=[make_media("m1", "a")],
            engagement=FakeEngagement({"a": EngagementCounts(likes=4, comments=2)}),
            listings=FakeListings(
                {"a": FeaturedListing(id="s1", title="Fight night", price_cents=9900)}
            ),
        )

        page = await pipeline.execute("viewer", {})
        body = page.model_dump(mode="json", by_alias=True)

        profile = body["results"][0]["creatorProfile"]
        assert body["nextPage"] is None
        assert profile["displayName"] == "Creator a"
        assert profile["likesCount"] == 4
        assert profile["commentsCount"] == 2
        assert profile["user"]["id"] == "a"
        assert profile["listing"]["price"] == 9900
        assert profile["medias"][0]["type"] == "image"
        assert profile["medias"][0]["thumbnailUrl"].endswith("m1_thumb.jpg")
        assert "score" not in profile

    @pytest.mark.asyncio
    async def test_engagement_failure_keeps_feed(self, build_pipeline):
        engagement = MagicMock()
        engagement.get_counts = AsyncMock(side_effect=RuntimeError("db gone"))
        pipeline = build_pipeline(profiles=[make_profile("a")], engagement=engagement)

        page = await pipeline.execute("viewer", {})

        assert page.total == 1
        assert page.results[0].creator_profile.likes_count == 0

    @pytest.mark.asyncio
    async def test_repository_failure_returns_empty_page(self, build_pipeline):
        pipeline = build_pipeline(profiles=[make_profile("a")])
        pipeline.profile_repository.list_creator_profiles = AsyncMock(
            side_effect=RuntimeError("timeout")
        )

        page = await pipeline.execute("viewer", {"page": "2", "limit": "5"})

        assert page.total == 0
        assert page.results == []
        assert page.page == 2
        assert page.limit == 5
        assert page.next_page is None

    @pytest.mark.asyncio
    async def test_build_failure_is_not_retried(self, build_pipeline):
        pipeline = build_pipeline(profiles=[make_profile("a")])
        pipeline.media_repository.query_feed_media = AsyncMock(side_effect=RuntimeError("boom"))

        page = await pipeline.execute("viewer", {})

        assert page.total == 0
        assert pipeline.media_repository.query_feed_media.await_count == 1

    @pytest.mark.asyncio
    async def test_cache_exception_still_returns_page(self, build_pipeline):
        broken_cache = MagicMock(spec=CacheService)
        broken_cache.get_or_compute = AsyncMock(side_effect=ConnectionError("redis down"))
        pipeline = build_pipeline(profiles=[make_profile("a")], cache=broken_cache)

        page = await pipeline.execute("viewer", {})

        assert page.total == 1
        assert result_ids(page) == ["a"]

    @pytest.mark.asyncio
    async def test_cache_hit_skips_repositories(self, build_pipeline):
        cached_page = await build_pipeline(profiles=[make_profile("cached")]).build(
            "viewer", FeedFilters()
        )
        cache = MagicMock(spec=CacheService)
        cache.get_or_compute = AsyncMock(return_value=cached_page)
        pipeline = build_pipeline(profiles=[make_profile("fresh")], cache=cache)

        page = await pipeline.execute("viewer", {})

        assert result_ids(page) == ["cached"]
        assert pipeline.media_repository.media_calls == 0
        assert pipeline.profile_repository.profile_calls == 0

    @pytest.mark.asyncio
    async def test_cache_key_and_ttl(self, build_pipeline, mock_cache, mock_settings):
        pipeline = build_pipeline(profiles=[make_profile("a")])

        await pipeline.execute("viewer-9", {"city": "Paris"})

        key, _factory, model_class = mock_cache.get_or_compute.await_args.args
        assert key.startswith("creator_feed:viewer-9:")
        assert model_class.__name__ == "FeedPage"
        assert mock_cache.get_or_compute.await_args.kwargs["ttl"] == (
            mock_settings.feed_cache_ttl_seconds
        )

    @pytest.mark.asyncio
    async def test_idempotent_without_state_change(self, mock_settings, mock_cache):
        """Real jitter: totals and id sets stay the same across calls."""
        profiles = [make_profile(f"c{i}", hours_ago=i) for i in range(8)]
        repo = FakeCreatorRepository(profiles)
        pipeline = CreatorFeedPipeline(
            settings=mock_settings,
            cache=mock_cache,
            media_repository=repo,
            profile_repository=repo,
            booking_history=FakeBookingHistory(),
        )

        first = await pipeline.execute("viewer", {"limit": 50})
        second = await pipeline.execute("viewer", {"limit": 50})

        assert first.total == second.total == 8
        assert set(result_ids(first)) == set(result_ids(second))

    @pytest.mark.asyncio
    async def test_results_bounded_by_limit_and_total(self, build_pipeline):
        pipeline = build_pipeline(profiles=[make_profile(f"c{i}") for i in range(7)])

        for raw_limit in ("0", "-1", "3", "500"):
            page = await pipeline.execute("viewer", {"limit": raw_limit})
            assert len(page.results) <= page.limit
            assert len(page.results) <= page.total
            assert 1 <= page.limit <= 50
