"""Feed pipelines."""

from creator_feed.pipelines.feed import CreatorFeedPipeline, group_media_by_creator

__all__ = ["CreatorFeedPipeline", "group_media_by_creator"]
