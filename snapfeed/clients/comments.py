"""Optimistic comment list: append/remove locally, reconcile with the server."""
from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from ..constants import MAX_COMMENT_LENGTH
from .feed_api import GENERIC_ERROR_MESSAGE, ApiError, FeedApiClient

logger = logging.getLogger(__name__)


class CommentComposer:
    def __init__(
        self,
        client: FeedApiClient,
        post_id: UUID | str,
        *,
        comments: list[dict[str, Any]] | None = None,
        comments_count: int | None = None,
        author: dict[str, Any] | None = None,
    ) -> None:
        self._client = client
        self.post_id = post_id
        self.comments: list[dict[str, Any]] = list(comments or [])
        self.comments_count = len(self.comments) if comments_count is None else comments_count
        self.author = author
        self.is_submitting = False
        self.error: str | None = None

    def _replace(self, pending_id: str, record: dict[str, Any]) -> None:
        for index, comment in enumerate(self.comments):
            if comment.get("id") == pending_id:
                self.comments[index] = record
                return
        self.comments.append(record)

    async def submit(self, content: str) -> dict[str, Any] | None:
        """Append ``content`` immediately; returns the server record or ``None`` on failure."""

        text = content.strip()
        if not text:
            self.error = "Comment cannot be empty"
            return None
        if len(text) > MAX_COMMENT_LENGTH:
            self.error = f"Comment must be at most {MAX_COMMENT_LENGTH} characters"
            return None
        if self.is_submitting:
            return None

        snapshot = (list(self.comments), self.comments_count)
        pending_id = f"pending-{uuid.uuid4().hex}"
        self.comments.append(
            {
                "id": pending_id,
                "post_id": str(self.post_id),
                "content": text,
                "created_at": datetime.now(timezone.utc).isoformat(),
                "user": self.author,
                "pending": True,
            }
        )
        self.comments_count += 1
        self.error = None
        self.is_submitting = True
        try:
            response = await self._client.create_comment(self.post_id, text)
        except ApiError as exc:
            self.comments, self.comments_count = snapshot
            self.error = exc.message or GENERIC_ERROR_MESSAGE
            logger.warning("Comment on %s rolled back: %s", self.post_id, self.error)
            return None
        finally:
            self.is_submitting = False

        record = response["comment"]
        self._replace(pending_id, record)
        return record

    async def delete(self, comment_id: UUID | str) -> bool:
        snapshot = (list(self.comments), self.comments_count)
        key = str(comment_id)
        remaining = [comment for comment in self.comments if str(comment.get("id")) != key]
        if len(remaining) == len(self.comments):
            return False

        self.comments = remaining
        self.comments_count = max(0, self.comments_count - 1)
        self.error = None
        try:
            await self._client.delete_comment(comment_id)
        except ApiError as exc:
            self.comments, self.comments_count = snapshot
            self.error = exc.message or GENERIC_ERROR_MESSAGE
            return False
        return True


__all__ = ["CommentComposer"]
