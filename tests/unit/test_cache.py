"""Tests for the Redis cache service."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from creator_feed.models.feed import FeedPage
from creator_feed.services.cache import CacheService
from creator_feed.utils.exceptions import CacheError


@pytest.fixture
def redis_client():
    """In-memory stand-in for a redis.asyncio client."""
    store: dict[str, str] = {}
    client = MagicMock()
    client.get = AsyncMock(side_effect=lambda key: store.get(key))

    async def set_value(key, value, ex=None):
        store[key] = value

    client.set = AsyncMock(side_effect=set_value)
    client.delete = AsyncMock(return_value=1)
    client.ping = AsyncMock(return_value=True)
    client.store = store
    return client


@pytest.fixture
def cache(redis_client):
    service = CacheService(default_ttl=300)
    service._client = redis_client
    return service


def sample_page(total: int = 3) -> FeedPage:
    return FeedPage(page=1, limit=20, total=total, next_page=None, results=[])


class TestGetOrCompute:
    """Tests for CacheService.get_or_compute."""

    @pytest.mark.asyncio
    async def test_miss_computes_and_stores(self, cache, redis_client):
        factory = AsyncMock(return_value=sample_page())

        result = await cache.get_or_compute("feed:1", factory, FeedPage, ttl=300)

        assert result.total == 3
        factory.assert_awaited_once()
        redis_client.set.assert_awaited_once()
        assert redis_client.set.await_args.kwargs["ex"] == 300
        assert '"nextPage":null' in redis_client.store["feed:1"]

    @pytest.mark.asyncio
    async def test_hit_skips_factory(self, cache):
        await cache.get_or_compute("feed:1", AsyncMock(return_value=sample_page(7)), FeedPage)
        factory = AsyncMock(return_value=sample_page(99))

        result = await cache.get_or_compute("feed:1", factory, FeedPage)

        assert result.total == 7
        factory.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_backend_failure_falls_back_to_compute(self, cache, redis_client):
        redis_client.get.side_effect = RedisConnectionError("down")
        redis_client.set.side_effect = RedisConnectionError("down")
        factory = AsyncMock(return_value=sample_page())

        result = await cache.get_or_compute("feed:1", factory, FeedPage)

        assert result.total == 3
        factory.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_corrupt_entry_is_a_miss(self, cache, redis_client):
        redis_client.store["feed:1"] = "{not json"
        factory = AsyncMock(return_value=sample_page())

        result = await cache.get_or_compute("feed:1", factory, FeedPage)

        assert result.total == 3
        factory.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_disabled_cache_always_computes(self, redis_client):
        cache = CacheService(enabled=False)
        cache._client = redis_client
        factory = AsyncMock(return_value=sample_page())

        await cache.get_or_compute("feed:1", factory, FeedPage)
        await cache.get_or_compute("feed:1", factory, FeedPage)

        assert factory.await_count == 2
        redis_client.get.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_concurrent_identical_keys_compute_once(self, cache):
        calls = 0

        async def slow_factory():
            nonlocal calls
            calls += 1
            await asyncio.sleep(0.01)
            return sample_page()

        results = await asyncio.gather(
            *[cache.get_or_compute("feed:1", slow_factory, FeedPage) for _ in range(5)]
        )

        assert calls == 1
        assert all(result.total == 3 for result in results)


class TestPing:
    """Tests for connectivity checks."""

    @pytest.mark.asyncio
    async def test_ping_ok(self, cache):
        assert await cache.ping() is True

    @pytest.mark.asyncio
    async def test_ping_failure_raises_cache_error(self, cache, redis_client):
        redis_client.ping.side_effect = RedisConnectionError("down")

        with pytest.raises(CacheError):
            await cache.ping()
