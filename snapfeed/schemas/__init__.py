"""Convenience exports for schema layer."""
from .comments import CommentCreate, CommentCreatedResponse, CommentDeleteResponse, CommentResponse
from .follow import FollowRecord, FollowRequest, FollowResponse
from .likes import LikeRequest, LikeResponse
from .posts import PostDeleteResponse, PostListResponse, PostResponse
from .users import UserProfileResponse, UserSummary, UserSyncRequest, UserSyncResponse

__all__ = [
    "CommentCreate",
    "CommentCreatedResponse",
    "CommentDeleteResponse",
    "CommentResponse",
    "FollowRecord",
    "FollowRequest",
    "FollowResponse",
    "LikeRequest",
    "LikeResponse",
    "PostDeleteResponse",
    "PostListResponse",
    "PostResponse",
    "UserProfileResponse",
    "UserSummary",
    "UserSyncRequest",
    "UserSyncResponse",
]
