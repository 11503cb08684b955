"""Async HTTP client for the snapfeed JSON API."""
from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

import httpx

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Something went wrong. Please try again."


class ApiError(RuntimeError):
    """Raised for transport failures and non-2xx responses.

    ``status_code`` is ``0`` when no response was received. ``message`` carries
    the server's ``{"error": ...}`` text when one was returned.
    """

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


def _error_message(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return GENERIC_ERROR_MESSAGE
    if isinstance(data, dict) and isinstance(data.get("error"), str) and data["error"]:
        return data["error"]
    return GENERIC_ERROR_MESSAGE


class FeedApiClient:
    """Thin wrapper around :class:`httpx.AsyncClient` carrying the caller's bearer token."""

    def __init__(
        self,
        base_url: str,
        *,
        token: str | None = None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._client = httpx.AsyncClient(base_url=base_url, headers=headers, timeout=timeout, transport=transport)

    async def __aenter__(self) -> "FeedApiClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise ApiError(0, GENERIC_ERROR_MESSAGE) from exc

        if response.is_error:
            message = _error_message(response)
            logger.info("%s %s returned %d: %s", method, path, response.status_code, message)
            raise ApiError(response.status_code, message)
        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError:
            logger.debug("%s %s returned a non-JSON body (%d)", method, path, response.status_code)
            return {}

    async def list_posts(self, *, page: int = 1, user_id: str | None = None) -> dict[str, Any]:
        params: dict[str, Any] = {"page": page}
        if user_id:
            params["user_id"] = user_id
        return await self._request("GET", "/posts", params=params)

    async def get_post(self, post_id: UUID | str) -> dict[str, Any]:
        return await self._request("GET", f"/posts/{post_id}")

    async def create_post(
        self,
        image: bytes,
        *,
        filename: str,
        content_type: str,
        caption: str | None = None,
    ) -> dict[str, Any]:
        data = {"caption": caption} if caption is not None else None
        return await self._request("POST", "/posts", files={"image": (filename, image, content_type)}, data=data)

    async def delete_post(self, post_id: UUID | str) -> dict[str, Any]:
        return await self._request("DELETE", f"/posts/{post_id}")

    async def create_comment(self, post_id: UUID | str, content: str) -> dict[str, Any]:
        return await self._request("POST", "/comments", json={"post_id": str(post_id), "content": content})

    async def delete_comment(self, comment_id: UUID | str) -> dict[str, Any]:
        return await self._request("DELETE", f"/comments/{comment_id}")

    async def like(self, post_id: UUID | str) -> dict[str, Any]:
        return await self._request("POST", "/likes", json={"post_id": str(post_id)})

    async def unlike(self, post_id: UUID | str) -> dict[str, Any]:
        return await self._request("DELETE", "/likes", json={"post_id": str(post_id)})

    async def follow(self, following_id: str) -> dict[str, Any]:
        return await self._request("POST", "/follows", json={"following_id": following_id})

    async def unfollow(self, following_id: str) -> dict[str, Any]:
        return await self._request("DELETE", "/follows", json={"following_id": following_id})

    async def get_profile(self, external_id: str) -> dict[str, Any]:
        return await self._request("GET", f"/users/{external_id}")

    async def sync_user(self, name: str) -> dict[str, Any]:
        return await self._request("POST", "/users/sync", json={"name": name})


__all__ = ["ApiError", "FeedApiClient", "GENERIC_ERROR_MESSAGE"]
