"""Scoring and pagination module."""

from creator_feed.ranking.pagination import PageSlice, ScoredItem, paginate, rank
from creator_feed.ranking.scorer import CreatorScorer

__all__ = ["CreatorScorer", "PageSlice", "ScoredItem", "paginate", "rank"]
