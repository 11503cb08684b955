"""Text helpers shared by the feed, modal and profile components."""
from __future__ import annotations

from datetime import datetime, timezone

CAPTION_CHARS_PER_LINE = 30
CAPTION_COLLAPSED_LINES = 2


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def format_relative_time(value: datetime, *, now: datetime | None = None) -> str:
    """Render ``value`` as "just now", "N minutes ago" ... or ``YYYY-MM-DD`` after a week."""

    moment = _as_utc(value)
    reference = _as_utc(now) if now is not None else datetime.now(timezone.utc)
    seconds = int((reference - moment).total_seconds())

    if seconds < 60:
        return "just now"
    minutes = seconds // 60
    if minutes < 60:
        return "1 minute ago" if minutes == 1 else f"{minutes} minutes ago"
    hours = minutes // 60
    if hours < 24:
        return "1 hour ago" if hours == 1 else f"{hours} hours ago"
    days = hours // 24
    if days < 7:
        return "1 day ago" if days == 1 else f"{days} days ago"
    return moment.strftime("%Y-%m-%d")


def caption_needs_expansion(caption: str | None) -> bool:
    """Whether a caption overflows the collapsed two-line preview."""

    if not caption:
        return False
    return len(caption) / CAPTION_CHARS_PER_LINE > CAPTION_COLLAPSED_LINES


def likes_label(count: int) -> str | None:
    if count <= 0:
        return None
    return "1 like" if count == 1 else f"{count:,} likes"


def view_all_comments_label(count: int) -> str:
    return f"View all {count:,} comments"


def parse_page(raw: str | None) -> int | None:
    """Return the 1-based page number from a query value, or ``None`` when it is not one."""

    if raw is None or raw == "":
        return 1
    try:
        page = int(raw)
    except ValueError:
        return None
    return page if page >= 1 else None


__all__ = [
    "caption_needs_expansion",
    "format_relative_time",
    "likes_label",
    "parse_page",
    "view_all_comments_label",
]
