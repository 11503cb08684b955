"""Profiles and synchronisation of identity-provider subjects into ``users``."""
from __future__ import annotations

import logging
from typing import Any

from fastapi import HTTPException, status
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..models import Post, User
from .follow_service import get_follow_stats
from .identity_service import find_user_by_external_id

logger = logging.getLogger(__name__)


def sync_user(db: Session, *, external_id: str, name: str) -> tuple[User, bool]:
    """Create or rename the record bound to ``external_id``."""

    user = find_user_by_external_id(db, external_id)
    if user is not None:
        if user.name != name:
            user.name = name
            try:
                db.commit()
            except SQLAlchemyError as exc:
                db.rollback()
                raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to update user") from exc
            db.refresh(user)
        return user, False

    user = User(external_id=external_id, name=name)
    db.add(user)
    try:
        db.commit()
    except IntegrityError as exc:
        # A concurrent sync for the same subject won the unique external_id race.
        db.rollback()
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="User is already registered") from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to register user %s", external_id)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to register user") from exc

    db.refresh(user)
    logger.info("Registered user %s for subject %s", user.id, external_id)
    return user, True


def get_profile(db: Session, *, external_id: str, viewer_external_id: str | None = None) -> dict[str, Any]:
    """Return profile details and counters for the user bound to ``external_id``."""

    user = find_user_by_external_id(db, external_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    is_own_profile = viewer_external_id is not None and viewer_external_id == external_id
    viewer_id = None
    if viewer_external_id is not None and not is_own_profile:
        viewer = find_user_by_external_id(db, viewer_external_id)
        viewer_id = viewer.id if viewer is not None else None

    posts_count = db.scalar(select(func.count(Post.id)).where(Post.user_id == user.id)) or 0
    stats = get_follow_stats(db, user_id=user.id, viewer_id=viewer_id)

    return {
        "id": user.id,
        "external_id": user.external_id,
        "name": user.name,
        "created_at": user.created_at,
        "posts_count": int(posts_count),
        "followers_count": stats.followers_count,
        "following_count": stats.following_count,
        "is_following": stats.is_following,
        "is_own_profile": is_own_profile,
    }


__all__ = ["sync_user", "get_profile"]
