"""Business logic for post likes."""
from __future__ import annotations

import logging
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..models import Like, Post, User

logger = logging.getLogger(__name__)


def _has_liked(db: Session, post_id: UUID, user_id: UUID) -> bool:
    return db.scalar(select(Like.id).where(Like.post_id == post_id, Like.user_id == user_id)) is not None


def like_post(db: Session, *, post_id: UUID, user: User) -> bool:
    """Record a like; returns ``False`` when the like already existed."""

    if db.get(Post, post_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")

    db.add(Like(post_id=post_id, user_id=user.id))
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        if not _has_liked(db, post_id, user.id):
            # Post vanished between the lookup and the insert.
            logger.info("Like on post %s rejected: %s", post_id, exc.orig)
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found") from exc
        logger.debug("User %s already likes post %s", user.id, post_id)
        return False
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to like post %s", post_id)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to like post") from exc
    return True


def unlike_post(db: Session, *, post_id: UUID, user: User) -> bool:
    """Remove a like; returns ``False`` when there was nothing to remove."""

    try:
        result = db.execute(delete(Like).where(Like.post_id == post_id, Like.user_id == user.id))
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to unlike post %s", post_id)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to unlike post") from exc
    return bool(result.rowcount)


__all__ = ["like_post", "unlike_post"]
