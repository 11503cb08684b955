"""Business logic for post comments."""
from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..models import Comment, Post, User
from .post_service import comment_payload

logger = logging.getLogger(__name__)


def create_comment(db: Session, *, post_id: UUID, author: User, content: str) -> dict[str, Any]:
    """Attach a comment by ``author`` to an existing post."""

    if db.get(Post, post_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")

    comment = Comment(post_id=post_id, user_id=author.id, content=content.strip())
    db.add(comment)
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to add comment to post %s", post_id)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to add comment") from exc

    db.refresh(comment)
    return comment_payload(comment, author)


def delete_comment(db: Session, *, comment_id: UUID, requester: User) -> UUID:
    """Delete a comment written by ``requester`` and return its post id."""

    comment = db.get(Comment, comment_id)
    if comment is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Comment not found")
    if comment.user_id != requester.id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="You can only delete your own comments")

    post_id = comment.post_id
    try:
        db.delete(comment)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to delete comment %s", comment_id)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to delete comment") from exc
    return post_id


__all__ = ["create_comment", "delete_comment"]
