"""Business logic for follower relationships."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..models import Follow, User
from .identity_service import find_user_by_external_id

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class FollowStats:
    user_id: UUID
    followers_count: int
    following_count: int
    is_following: bool


def _get_target_or_404(db: Session, external_id: str) -> User:
    user = find_user_by_external_id(db, external_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


def _find_follow(db: Session, follower_id: UUID, following_id: UUID) -> Follow | None:
    return db.scalar(
        select(Follow).where(Follow.follower_id == follower_id, Follow.following_id == following_id)
    )


def follow_user(db: Session, *, follower: User, target_external_id: str) -> tuple[Follow, bool]:
    """Create the follow edge; returns the edge and whether it was newly created."""

    target = _get_target_or_404(db, target_external_id)
    if follower.id == target.id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Cannot follow yourself")

    record = Follow(follower_id=follower.id, following_id=target.id)
    db.add(record)
    try:
        db.commit()
    except IntegrityError:
        # (follower_id, following_id) is the primary key: already following.
        db.rollback()
        existing = _find_follow(db, follower.id, target.id)
        if existing is None:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Unable to follow user")
        return existing, False
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to follow user %s", target.id)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Unable to follow user") from exc

    db.refresh(record)
    logger.info("User %s now follows %s", follower.id, target.id)
    return record, True


def unfollow_user(db: Session, *, follower: User, target_external_id: str) -> bool:
    target = _get_target_or_404(db, target_external_id)

    record = _find_follow(db, follower.id, target.id)
    if record is None:
        return False
    try:
        db.delete(record)
        db.commit()
        return True
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to unfollow user %s", target.id)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Unable to unfollow user") from exc


def get_follow_stats(db: Session, *, user_id: UUID, viewer_id: UUID | None = None) -> FollowStats:
    followers_count = db.scalar(
        select(func.count()).select_from(Follow).where(Follow.following_id == user_id)
    ) or 0
    following_count = db.scalar(
        select(func.count()).select_from(Follow).where(Follow.follower_id == user_id)
    ) or 0

    is_following = False
    if viewer_id is not None and viewer_id != user_id:
        is_following = _find_follow(db, viewer_id, user_id) is not None

    return FollowStats(
        user_id=user_id,
        followers_count=int(followers_count),
        following_count=int(following_count),
        is_following=is_following,
    )


__all__ = ["FollowStats", "follow_user", "unfollow_user", "get_follow_stats"]
