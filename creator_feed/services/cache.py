"""Redis cache service."""

import asyncio
import weakref
from collections.abc import Awaitable, Callable
from typing import TypeVar

import redis.asyncio as redis
from pydantic import BaseModel

from creator_feed.utils.exceptions import CacheError
from creator_feed.utils.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T", bound=BaseModel)


class CacheService:
    """Redis-based caching service with Pydantic model support.

    Reads and writes are best-effort: backend failures are logged and
    treated as a miss (reads) or ignored (writes).
    """

    def __init__(
        self,
        redis_url: str = "redis://localhost:6379/0",
        password: str | None = None,
        default_ttl: int = 300,
        enabled: bool = True,
    ):
        """Initialize cache service.

        Args:
            redis_url: Redis connection URL
            password: Redis password (optional)
            default_ttl: Default TTL in seconds
            enabled: Whether caching is enabled
        """
        self.redis_url = redis_url
        self.password = password
        self.default_ttl = default_ttl
        self.enabled = enabled
        self._client: redis.Redis | None = None
        self._locks: weakref.WeakValueDictionary[str, asyncio.Lock] = (
            weakref.WeakValueDictionary()
        )

    @property
    def client(self) -> redis.Redis:
        """Get or create Redis client."""
        if self._client is None:
            self._client = redis.from_url(
                self.redis_url,
                password=self.password,
                decode_responses=True,
            )
        return self._client

    async def close(self) -> None:
        """Close Redis connection."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def ping(self) -> bool:
        """Check Redis connectivity."""
        try:
            await self.client.ping()
            return True
        except Exception as e:
            logger.warning("redis_ping_failed", error=str(e))
            raise CacheError(f"Redis ping failed: {e}")

    async def get(self, key: str) -> str | None:
        """Get raw string value from cache."""
        if not self.enabled:
            return None

        try:
            return await self.client.get(key)
        except Exception as e:
            logger.warning("cache_get_failed", key=key, error=str(e))
            return None

    async def set(
        self,
        key: str,
        value: str,
        ttl: int | None = None,
    ) -> None:
        """Set raw string value in cache."""
        if not self.enabled:
            return

        try:
            await self.client.set(key, value, ex=ttl or self.default_ttl)
        except Exception as e:
            logger.warning("cache_set_failed", key=key, error=str(e))

    async def get_model(self, key: str, model_class: type[T]) -> T | None:
        """Get Pydantic model from cache; unreadable entries count as a miss."""
        raw = await self.get(key)
        if raw is None:
            return None

        try:
            return model_class.model_validate_json(raw)
        except ValueError as e:
            logger.warning("cache_model_validation_failed", key=key, error=str(e))
            return None

    async def set_model(
        self,
        key: str,
        model: BaseModel,
        ttl: int | None = None,
    ) -> None:
        """Set Pydantic model in cache, serialized with its field aliases."""
        await self.set(key, model.model_dump_json(by_alias=True), ttl)

    async def get_or_compute(
        self,
        key: str,
        factory: Callable[[], Awaitable[T]],
        model_class: type[T],
        ttl: int | None = None,
    ) -> T:
        """Get a model from cache or compute and store it.

        Concurrent calls for the same key inside this process wait on a
        shared lock, so only the first computes and the rest read its result.

        Args:
            key: Cache key
            factory: Async callable producing the model on a miss
            model_class: Model type used to rebuild cached JSON
            ttl: Time to live in seconds

        Returns:
            Cached or freshly computed model
        """
        if not self.enabled:
            return await factory()

        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock

        async with lock:
            cached = await self.get_model(key, model_class)
            if cached is not None:
                logger.debug("cache_hit", key=key)
                return cached

            logger.debug("cache_miss", key=key)
            value = await factory()
            await self.set_model(key, value, ttl)
            return value
