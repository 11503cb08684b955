"""Schemas for comment endpoints."""
from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from ..constants import MAX_COMMENT_LENGTH
from .users import UserSummary


class CommentCreate(BaseModel):
    post_id: UUID
    content: str = Field(..., max_length=MAX_COMMENT_LENGTH)

    @field_validator("content")
    @classmethod
    def reject_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Comment cannot be empty")
        return value


class CommentResponse(BaseModel):
    id: UUID
    post_id: UUID
    user_id: UUID
    content: str
    created_at: datetime
    updated_at: datetime
    user: UserSummary


class CommentCreatedResponse(BaseModel):
    comment: CommentResponse


class CommentDeleteResponse(BaseModel):
    success: bool = True
    comment_id: UUID
    post_id: UUID


__all__ = ["CommentCreate", "CommentResponse", "CommentCreatedResponse", "CommentDeleteResponse"]
