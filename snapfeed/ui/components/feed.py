"""Home feed: loading, error, empty and populated states."""
from __future__ import annotations

from typing import Any, Mapping, Sequence

from markupsafe import Markup

from .cards import post_card
from .feedback import empty_state, error_state, post_card_skeleton

INITIAL_SKELETONS = 3
APPEND_SKELETONS = 2


def feed(
    posts: Sequence[Mapping[str, Any]],
    *,
    page: int = 1,
    has_more: bool = False,
    loading: bool = False,
    error: str | None = None,
) -> Markup:
    if loading and not posts:
        skeletons = "".join(post_card_skeleton() for _ in range(INITIAL_SKELETONS))
        return Markup(f"<section class=\"feed space-y-4\">{skeletons}</section>")

    if error and not posts:
        return Markup(f"<section class=\"feed\">{error_state(error, retry_href='/?page=1')}</section>")

    if not posts:
        empty = empty_state("No posts yet.", hint="Share the first photo!")
        return Markup(f"<section class=\"feed\">{empty}</section>")

    cards = "".join(post_card(post) for post in posts)
    tail = ""
    if loading:
        tail = "".join(post_card_skeleton() for _ in range(APPEND_SKELETONS))
    elif has_more:
        tail = (
            f"<a href=\"/?page={page + 1}\" class=\"load-more block py-6 text-center text-sm font-semibold text-sky-500 hover:opacity-70\">"
            "Load more</a>"
        )
    return Markup(f"<section class=\"feed space-y-4\">{cards}{tail}</section>")


__all__ = ["feed"]
