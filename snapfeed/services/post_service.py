"""Business logic for posts: paginated listing, detail, creation and deletion."""
from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

from fastapi import HTTPException, UploadFile, status
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..constants import ALLOWED_IMAGE_TYPES, COMMENT_PREVIEW_LIMIT, MAX_CAPTION_LENGTH, MAX_IMAGE_BYTES
from ..models import Comment, Like, Post, User
from .storage_service import (
    StorageConfigurationError,
    StorageUploadError,
    delete_object_quietly,
    delete_public_url_quietly,
    upload_image,
)

logger = logging.getLogger(__name__)


def user_summary(user: User) -> dict[str, Any]:
    return {"id": user.id, "external_id": user.external_id, "name": user.name}


def comment_payload(comment: Comment, author: User) -> dict[str, Any]:
    return {
        "id": comment.id,
        "post_id": comment.post_id,
        "user_id": comment.user_id,
        "content": comment.content,
        "created_at": comment.created_at,
        "updated_at": comment.updated_at,
        "user": user_summary(author),
    }


def _post_payload(
    post: Post,
    author: User,
    *,
    likes_count: int,
    comments_count: int,
    comments: list[dict[str, Any]],
    is_liked: bool,
) -> dict[str, Any]:
    return {
        "id": post.id,
        "user_id": post.user_id,
        "image_url": post.image_url,
        "caption": post.caption,
        "created_at": post.created_at,
        "updated_at": post.updated_at,
        "user": user_summary(author),
        "likes_count": likes_count,
        "comments_count": comments_count,
        "comments": comments,
        "is_liked": is_liked,
    }


def _get_post_or_404(db: Session, post_id: UUID) -> Post:
    post = db.get(Post, post_id)
    if post is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")
    return post


def _post_comments(db: Session, post_id: UUID, *, newest_first: bool, limit: int | None = None) -> list[dict[str, Any]]:
    ordering = (Comment.created_at.desc(), Comment.id.desc()) if newest_first else (Comment.created_at.asc(), Comment.id.asc())
    stmt = (
        select(Comment, User)
        .join(User, Comment.user_id == User.id)
        .where(Comment.post_id == post_id)
        .order_by(*ordering)
    )
    if limit is not None:
        stmt = stmt.limit(limit)
    return [comment_payload(comment, author) for comment, author in db.execute(stmt).all()]


def _viewer_has_liked(db: Session, post_id: UUID, viewer_id: UUID | None) -> bool:
    if viewer_id is None:
        return False
    return (
        db.scalar(select(Like.id).where(Like.post_id == post_id, Like.user_id == viewer_id).limit(1))
        is not None
    )


def list_posts(
    db: Session,
    *,
    page: int,
    page_size: int,
    viewer_id: UUID | None = None,
    author_id: UUID | None = None,
) -> tuple[list[dict[str, Any]], bool]:
    """Return one page of posts (newest first) and whether more pages exist."""

    if page < 1:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="page must be a positive integer")

    offset = (page - 1) * page_size

    like_count_col = select(func.count(Like.id)).where(Like.post_id == Post.id).scalar_subquery()
    comment_count_col = select(func.count(Comment.id)).where(Comment.post_id == Post.id).scalar_subquery()
    statement = select(Post, User, like_count_col, comment_count_col).join(User, Post.user_id == User.id)

    viewer_like_col = None
    if viewer_id is not None:
        viewer_like_col = (
            select(func.count(Like.id))
            .where(Like.post_id == Post.id, Like.user_id == viewer_id)
            .scalar_subquery()
        )
        statement = statement.add_columns(viewer_like_col)

    count_statement = select(func.count(Post.id))
    if author_id is not None:
        statement = statement.where(Post.user_id == author_id)
        count_statement = count_statement.where(Post.user_id == author_id)

    statement = statement.order_by(Post.created_at.desc(), Post.id.desc()).offset(offset).limit(page_size)

    records: list[dict[str, Any]] = []
    for row in db.execute(statement).all():
        post, author, like_count_value, comment_count_value = row[0], row[1], row[2], row[3]
        viewer_like_value = row[4] if viewer_like_col is not None else 0
        comments_count = int(comment_count_value or 0)
        preview: list[dict[str, Any]] = []
        if comments_count > 0:
            preview = _post_comments(db, post.id, newest_first=True, limit=COMMENT_PREVIEW_LIMIT)
        records.append(
            _post_payload(
                post,
                author,
                likes_count=int(like_count_value or 0),
                comments_count=comments_count,
                comments=preview,
                is_liked=bool(viewer_like_value),
            )
        )

    total = int(db.scalar(count_statement) or 0)
    has_more = offset + page_size < total
    logger.debug("Listed page %d (%d posts, total=%d, has_more=%s)", page, len(records), total, has_more)
    return records, has_more


def get_post_detail(db: Session, *, post_id: UUID, viewer_id: UUID | None = None) -> dict[str, Any]:
    """Return a post with its full comment thread, oldest comment first."""

    post = _get_post_or_404(db, post_id)
    author = db.get(User, post.user_id)
    if author is None:  # pragma: no cover - guarded by the foreign key
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")

    likes_count = db.scalar(select(func.count(Like.id)).where(Like.post_id == post.id)) or 0
    comments = _post_comments(db, post.id, newest_first=False)
    return _post_payload(
        post,
        author,
        likes_count=int(likes_count),
        comments_count=len(comments),
        comments=comments,
        is_liked=_viewer_has_liked(db, post.id, viewer_id),
    )


def normalize_caption(caption: str | None) -> str | None:
    if caption is None:
        return None
    if len(caption) > MAX_CAPTION_LENGTH:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Caption must be at most {MAX_CAPTION_LENGTH} characters",
        )
    text = caption.strip()
    return text or None


async def read_image_upload(file: UploadFile) -> bytes:
    """Validate type and size of an uploaded image and return its bytes."""

    content_type = (file.content_type or "").strip().lower()
    if content_type not in ALLOWED_IMAGE_TYPES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Only JPEG, PNG or WebP images are allowed",
        )

    data = await file.read(MAX_IMAGE_BYTES + 1)
    if not data:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Image file is empty")
    if len(data) > MAX_IMAGE_BYTES:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Image must be 5MB or smaller")
    return data


async def create_post(
    db: Session,
    *,
    author: User,
    image: bytes,
    filename: str | None,
    content_type: str,
    caption: str | None,
) -> dict[str, Any]:
    """Upload the image, then persist the post; the upload is undone if the insert fails."""

    try:
        upload = await upload_image(image, owner=author.external_id, filename=filename, content_type=content_type)
    except StorageConfigurationError as exc:
        logger.error("Object storage is not configured: %s", exc)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)) from exc
    except StorageUploadError as exc:  # pragma: no cover - network bound
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc

    post = Post(user_id=author.id, image_url=upload.url, caption=caption)
    db.add(post)
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to persist post for user %s; removing uploaded image", author.id)
        await delete_object_quietly(upload.key)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to create post") from exc

    db.refresh(post)
    logger.info("User %s created post %s", author.id, post.id)
    return _post_payload(post, author, likes_count=0, comments_count=0, comments=[], is_liked=False)


async def delete_post(db: Session, *, post_id: UUID, requester: User) -> None:
    """Delete a post owned by ``requester``; comments and likes go with it."""

    post = _get_post_or_404(db, post_id)
    if post.user_id != requester.id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="You can only delete your own posts")

    image_url = post.image_url
    try:
        db.delete(post)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to delete post %s", post_id)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to delete post") from exc

    logger.info("User %s deleted post %s", requester.id, post_id)
    await delete_public_url_quietly(image_url)


__all__ = [
    "comment_payload",
    "create_post",
    "delete_post",
    "get_post_detail",
    "list_posts",
    "normalize_caption",
    "read_image_upload",
    "user_summary",
]
