"""Async API client and optimistic mutation helpers."""
from .comments import CommentComposer
from .feed_api import ApiError, FeedApiClient
from .optimistic import FollowToggle, LikeToggle, OptimisticToggle

__all__ = [
    "ApiError",
    "CommentComposer",
    "FeedApiClient",
    "FollowToggle",
    "LikeToggle",
    "OptimisticToggle",
]
