"""Schemas for user and profile endpoints."""
from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..constants import MAX_NAME_LENGTH


class UserSummary(BaseModel):
    """Author block nested inside posts and comments."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    external_id: str
    name: str


class UserProfileResponse(BaseModel):
    id: UUID
    external_id: str
    name: str
    created_at: datetime
    posts_count: int = 0
    followers_count: int = 0
    following_count: int = 0
    is_following: bool = False
    is_own_profile: bool = False


class UserSyncRequest(BaseModel):
    name: str = Field(..., max_length=MAX_NAME_LENGTH)

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("Name cannot be empty")
        return cleaned


class UserSyncResponse(BaseModel):
    user: UserSummary
    created: bool


__all__ = ["UserSummary", "UserProfileResponse", "UserSyncRequest", "UserSyncResponse"]
