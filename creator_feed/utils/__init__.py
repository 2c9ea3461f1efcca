"""Utility modules."""

from creator_feed.utils.exceptions import APIError, CacheError, CreatorFeedError, RepositoryError
from creator_feed.utils.hashing import generate_cache_key
from creator_feed.utils.logging import get_logger, setup_logging

__all__ = [
    "CreatorFeedError",
    "RepositoryError",
    "CacheError",
    "APIError",
    "get_logger",
    "setup_logging",
    "generate_cache_key",
]
