"""Schemas supporting follower APIs."""
from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class FollowRequest(BaseModel):
    # External identity id of the account to (un)follow.
    following_id: str = Field(..., min_length=1, max_length=255)


class FollowRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    follower_id: UUID
    following_id: UUID
    created_at: datetime


class FollowResponse(BaseModel):
    success: bool = True
    follow: FollowRecord | None = None


__all__ = ["FollowRequest", "FollowRecord", "FollowResponse"]
