"""Profile header and the profile's post grid."""
from __future__ import annotations

from typing import Any, Mapping, Sequence

from markupsafe import Markup, escape

from .feedback import empty_state, error_state, grid_skeleton


def follow_button(*, following_id: str, is_following: bool, disabled: bool = False) -> Markup:
    palette = (
        "border border-slate-300 bg-white text-slate-900 hover:border-rose-500 hover:text-rose-500"
        if is_following
        else "bg-sky-500 text-white hover:bg-sky-600"
    )
    disabled_attr = " disabled" if disabled else ""
    return Markup(
        f"<button type=\"button\" class=\"follow-btn rounded-md px-4 py-1.5 text-sm font-semibold {palette}\" "
        f"data-following-id=\"{escape(following_id)}\" data-following=\"{'true' if is_following else 'false'}\"{disabled_attr}>"
        f"{'Following' if is_following else 'Follow'}</button>"
    )


def _stat(value: int, label: str, role: str) -> str:
    return (
        f"<div class=\"flex items-center gap-1\" data-stat=\"{role}\">"
        f"<span class=\"font-semibold\">{int(value):,}</span><span>{label}</span></div>"
    )


def profile_header(profile: Mapping[str, Any], *, viewer_signed_in: bool = False) -> Markup:
    """Name, counts and either a follow toggle or the own-profile marker."""

    if profile.get("is_own_profile"):
        action = "<span class=\"own-profile-badge rounded-md border border-slate-300 px-4 py-1.5 text-sm font-semibold\">Your profile</span>"
    else:
        action = follow_button(
            following_id=profile["external_id"],
            is_following=bool(profile.get("is_following")),
            disabled=not viewer_signed_in,
        )

    stats = "".join(
        [
            _stat(profile.get("posts_count", 0), "posts", "posts"),
            _stat(profile.get("followers_count", 0), "followers", "followers"),
            _stat(profile.get("following_count", 0), "following", "following"),
        ]
    )
    return Markup(
        f"""
        <section class=\"profile-header flex flex-col gap-4 px-4 py-6 md:flex-row md:gap-12\">
            <div class=\"flex h-[90px] w-[90px] items-center justify-center rounded-full bg-slate-200 text-3xl text-slate-500 md:h-[150px] md:w-[150px]\">{escape(profile['name'][:1].upper())}</div>
            <div class=\"flex flex-1 flex-col gap-4\">
                <div class=\"flex items-center gap-4\">
                    <h1 class=\"text-2xl font-light\">{escape(profile['name'])}</h1>
                    {action}
                </div>
                <div class=\"flex items-center gap-6\">{stats}</div>
            </div>
        </section>
        """
    )


def post_grid(
    posts: Sequence[Mapping[str, Any]],
    *,
    user_id: str,
    page: int = 1,
    has_more: bool = False,
    loading: bool = False,
    error: str | None = None,
) -> Markup:
    """Three-column thumbnail grid with hover counters."""

    base = f"/profile/{escape(user_id)}"
    if loading and page == 1:
        body = grid_skeleton()
    elif error:
        body = error_state(error, retry_href=f"{base}?page=1")
    elif not posts:
        body = empty_state("No posts yet")
    else:
        tiles = "".join(
            f"""
            <a href=\"/post/{escape(str(post['id']))}\" class=\"grid-item group relative block aspect-square bg-slate-100\">
                <img src=\"{escape(post['image_url'])}\" alt=\"{escape(post.get('caption') or 'Post')}\" class=\"h-full w-full object-cover\" loading=\"lazy\">
                <div class=\"absolute inset-0 hidden items-center justify-center gap-6 bg-black/40 text-white group-hover:flex\">
                    <span class=\"font-semibold\">♥ {int(post.get('likes_count', 0))}</span>
                    <span class=\"font-semibold\">💬 {int(post.get('comments_count', 0))}</span>
                </div>
            </a>
            """
            for post in posts
        )
        more = (
            f"<a href=\"{base}?page={page + 1}\" class=\"load-more block py-8 text-center text-sm text-sky-500\">Load more</a>"
            if has_more
            else ""
        )
        body = f"<div class=\"grid grid-cols-3 gap-1 md:gap-4\">{tiles}</div>{more}"

    return Markup(f"<section class=\"post-grid px-4 py-6\">{body}</section>")


__all__ = ["follow_button", "post_grid", "profile_header"]
