"""Pydantic schemas for post resources."""
from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from .comments import CommentResponse
from .users import UserSummary


class PostResponse(BaseModel):
    """Serialized post with its author, counters and (preview or full) comments."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    image_url: str
    caption: str | None = None
    created_at: datetime
    updated_at: datetime
    user: UserSummary
    likes_count: int = 0
    comments_count: int = 0
    comments: list[CommentResponse] = Field(default_factory=list)
    is_liked: bool = False


class PostListResponse(BaseModel):
    """One page of the feed."""

    posts: list[PostResponse]
    has_more: bool
    page: int


class PostDeleteResponse(BaseModel):
    success: bool = True
    message: str = "Post deleted"


__all__ = ["PostResponse", "PostListResponse", "PostDeleteResponse"]
