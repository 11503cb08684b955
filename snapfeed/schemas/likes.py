"""Schemas for like endpoints."""
from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel


class LikeRequest(BaseModel):
    post_id: UUID


class LikeResponse(BaseModel):
    success: bool = True
    liked: bool


__all__ = ["LikeRequest", "LikeResponse"]
