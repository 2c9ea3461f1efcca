"""Ranking order and page slicing."""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass
class ScoredItem(Generic[T]):
    """An item paired with its ranking score."""

    score: float
    item: T


@dataclass
class PageSlice(Generic[T]):
    """One page of a ranked list."""

    items: list[T]
    total: int
    next_page: int | None


def rank(scored: list[ScoredItem[T]]) -> list[ScoredItem[T]]:
    """Sort descending by score. Python's sort is stable, so equal scores keep input order."""
    return sorted(scored, key=lambda entry: entry.score, reverse=True)


def paginate(items: list[T], page: int, limit: int) -> PageSlice[T]:
    """Slice a ranked list into a page.

    Args:
        items: Fully ranked items
        page: 1-based page number
        limit: Page size

    Returns:
        PageSlice whose next_page is set only when more items remain
    """
    offset = (page - 1) * limit
    total = len(items)
    has_next = offset + limit < total

    return PageSlice(
        items=items[offset : offset + limit],
        total=total,
        next_page=page + 1 if has_next else None,
    )
