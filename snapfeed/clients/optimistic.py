"""Optimistic like/follow toggles with exact rollback on failure."""
from __future__ import annotations

import inspect
import logging
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable
from uuid import UUID

from .feed_api import GENERIC_ERROR_MESSAGE, ApiError, FeedApiClient

logger = logging.getLogger(__name__)

SuccessCallback = Callable[[bool], "Awaitable[Any] | Any"]


class OptimisticToggle(ABC):
    """A boolean relation plus its counter, flipped locally before the server confirms.

    ``toggle()`` snapshots ``(active, count)``, flips both, then asks the server
    for the new state. On failure the snapshot is restored as-is rather than
    re-derived, so concurrent server-side changes to the count are not guessed at.
    A ``toggle()`` issued while a request is in flight is ignored.
    """

    def __init__(self, *, active: bool, count: int, on_success: SuccessCallback | None = None) -> None:
        self._active = active
        self._count = count
        self._loading = False
        self._error: str | None = None
        self._on_success = on_success

    @property
    def active(self) -> bool:
        return self._active

    @property
    def count(self) -> int:
        return self._count

    @property
    def is_loading(self) -> bool:
        return self._loading

    @property
    def error(self) -> str | None:
        return self._error

    @abstractmethod
    async def _send(self, active: bool) -> None:
        """Ask the server for ``active``; raise :class:`ApiError` on failure."""

    async def toggle(self) -> bool:
        """Flip the state; returns ``True`` once the server accepted the change."""

        if self._loading:
            logger.debug("%s ignored toggle while a request is in flight", type(self).__name__)
            return False

        snapshot = (self._active, self._count)
        desired = not self._active
        self._active = desired
        self._count += 1 if desired else -1
        self._error = None
        self._loading = True
        try:
            await self._send(desired)
        except ApiError as exc:
            self._active, self._count = snapshot
            self._error = exc.message or GENERIC_ERROR_MESSAGE
            logger.warning("%s rolled back: %s", type(self).__name__, self._error)
            return False
        finally:
            self._loading = False

        if self._on_success is not None:
            result = self._on_success(desired)
            if inspect.isawaitable(result):
                await result
        return True


class LikeToggle(OptimisticToggle):
    def __init__(
        self,
        client: FeedApiClient,
        post_id: UUID | str,
        *,
        liked: bool,
        likes_count: int,
        on_success: SuccessCallback | None = None,
    ) -> None:
        super().__init__(active=liked, count=likes_count, on_success=on_success)
        self._client = client
        self.post_id = post_id

    @property
    def liked(self) -> bool:
        return self.active

    @property
    def likes_count(self) -> int:
        return self.count

    async def _send(self, active: bool) -> None:
        if active:
            await self._client.like(self.post_id)
        else:
            await self._client.unlike(self.post_id)


class FollowToggle(OptimisticToggle):
    """Follow state for a profile; ``following_id`` is the target's external identity id."""

    def __init__(
        self,
        client: FeedApiClient,
        following_id: str,
        *,
        following: bool,
        followers_count: int,
        on_success: SuccessCallback | None = None,
    ) -> None:
        super().__init__(active=following, count=followers_count, on_success=on_success)
        self._client = client
        self.following_id = following_id

    @property
    def following(self) -> bool:
        return self.active

    @property
    def followers_count(self) -> int:
        return self.count

    async def _send(self, active: bool) -> None:
        if active:
            await self._client.follow(self.following_id)
        else:
            await self._client.unfollow(self.following_id)


__all__ = ["FollowToggle", "LikeToggle", "OptimisticToggle"]
