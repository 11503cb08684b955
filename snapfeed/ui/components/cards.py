"""Card-style components for posts and comments."""
from __future__ import annotations

from typing import Any, Mapping

from markupsafe import Markup, escape

from ...constants import COMMENT_PREVIEW_LIMIT
from ..formatting import caption_needs_expansion, format_relative_time, likes_label, view_all_comments_label


def _profile_href(user: Mapping[str, Any]) -> str:
    return f"/profile/{escape(user['external_id'])}"


def like_button(*, post_id: Any, liked: bool, count: int, disabled: bool = False) -> Markup:
    """Heart toggle carrying the state an optimistic like toggle starts from."""

    state_class = "text-rose-500" if liked else "text-slate-900"
    label = "Unlike" if liked else "Like"
    disabled_attr = " disabled" if disabled else ""
    return Markup(
        f"<button type=\"button\" class=\"like-btn {state_class} transition hover:opacity-70\" "
        f"data-post-id=\"{escape(str(post_id))}\" data-liked=\"{'true' if liked else 'false'}\" "
        f"data-likes-count=\"{int(count)}\" aria-pressed=\"{'true' if liked else 'false'}\" "
        f"aria-label=\"{label}\"{disabled_attr}>{'♥' if liked else '♡'}</button>"
    )


def comment_item(comment: Mapping[str, Any], *, can_delete: bool = False, show_time: bool = False) -> Markup:
    author = comment["user"]
    time_html = (
        f"<time class=\"ml-2 text-xs text-slate-400\">{escape(format_relative_time(comment['created_at']))}</time>"
        if show_time
        else ""
    )
    delete_html = (
        f"<button type=\"button\" class=\"comment-delete ml-2 text-xs text-slate-400 hover:text-rose-500\" "
        f"data-comment-id=\"{escape(str(comment['id']))}\">Delete</button>"
        if can_delete
        else ""
    )
    return Markup(
        f"""
        <div class=\"comment text-sm text-slate-900\" data-comment-id=\"{escape(str(comment['id']))}\">
            <a href=\"{_profile_href(author)}\" class=\"mr-1 font-semibold hover:opacity-70\">{escape(author['name'])}</a>
            <span class=\"whitespace-pre-line\">{escape(comment['content'])}</span>{time_html}{delete_html}
        </div>
        """
    )


def post_card(post: Mapping[str, Any], *, expanded: bool = False) -> Markup:
    """Return a feed card: header, square image, actions and the comment preview."""

    author = post["user"]
    post_id = escape(str(post["id"]))
    caption = post.get("caption")
    image_alt = caption or f"Post by {author['name']}"

    caption_html = ""
    if caption:
        clamp = "" if expanded else " line-clamp-2"
        toggle = ""
        if caption_needs_expansion(caption):
            toggle = (
                f"<a href=\"/post/{post_id}\" class=\"caption-toggle ml-1 text-slate-400 hover:opacity-70\">"
                f"{'less' if expanded else '... more'}</a>"
            )
        caption_html = f"""
            <div class=\"caption text-sm text-slate-900\">
                <a href=\"{_profile_href(author)}\" class=\"mr-1 font-semibold hover:opacity-70\">{escape(author['name'])}</a>
                <span class=\"caption-text{clamp}\">{escape(caption)}</span>{toggle}
            </div>
        """

    likes_text = likes_label(int(post.get("likes_count", 0)))
    likes_html = f"<div class=\"likes-count text-sm font-semibold\">{escape(likes_text)}</div>" if likes_text else ""

    comments = list(post.get("comments") or [])
    comments_count = int(post.get("comments_count", 0))
    preview_html = ""
    if comments:
        view_all = ""
        if comments_count > COMMENT_PREVIEW_LIMIT:
            view_all = (
                f"<a href=\"/post/{post_id}\" class=\"view-all-comments block text-sm text-slate-400 hover:opacity-70\">"
                f"{escape(view_all_comments_label(comments_count))}</a>"
            )
        items = "".join(comment_item(comment) for comment in comments[:COMMENT_PREVIEW_LIMIT])
        preview_html = f"<div class=\"comment-preview space-y-1\">{view_all}{items}</div>"

    like_html = like_button(post_id=post["id"], liked=bool(post.get("is_liked")), count=int(post.get("likes_count", 0)))

    return Markup(
        f"""
        <article class=\"post-card rounded-lg border border-slate-200 bg-white\" data-post-id=\"{post_id}\">
            <header class=\"flex h-[60px] items-center gap-3 border-b border-slate-200 px-4\">
                <a href=\"{_profile_href(author)}\" class=\"font-semibold text-slate-900 hover:opacity-70\">{escape(author['name'])}</a>
                <time class=\"text-xs text-slate-400\">{escape(format_relative_time(post['created_at']))}</time>
            </header>
            <a href=\"/post/{post_id}\" class=\"block aspect-square w-full bg-slate-100\">
                <img src=\"{escape(post['image_url'])}\" alt=\"{escape(image_alt)}\" class=\"h-full w-full object-cover\" loading=\"lazy\">
            </a>
            <div class=\"flex h-[48px] items-center gap-4 px-4\">
                {like_html}
                <a href=\"/post/{post_id}\" class=\"comment-link hover:opacity-70\" aria-label=\"Comment\">💬</a>
            </div>
            <div class=\"space-y-2 px-4 pb-4\">
                {likes_html}
                {caption_html}
                {preview_html}
            </div>
        </article>
        """
    )


__all__ = ["comment_item", "like_button", "post_card"]
