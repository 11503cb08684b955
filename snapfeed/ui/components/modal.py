"""Post detail view, comment form and the new-post upload form."""
from __future__ import annotations

from typing import Any, Mapping

from markupsafe import Markup, escape

from ...constants import ALLOWED_IMAGE_TYPES, MAX_CAPTION_LENGTH, MAX_COMMENT_LENGTH, MAX_IMAGE_BYTES
from ..formatting import format_relative_time, likes_label
from .cards import comment_item, like_button
from .feedback import error_state, loading_spinner


def comment_form(post_id: Any, *, error: str | None = None, disabled: bool = False) -> Markup:
    error_html = f"<p class=\"comment-error text-xs text-rose-500\" role=\"alert\">{escape(error)}</p>" if error else ""
    disabled_attr = " disabled" if disabled else ""
    return Markup(
        f"""
        <form class=\"comment-form flex flex-col gap-1 border-t border-slate-200 px-4 py-3\" data-post-id=\"{escape(str(post_id))}\">
            <div class=\"flex items-center gap-2\">
                <textarea name=\"content\" rows=\"1\" maxlength=\"{MAX_COMMENT_LENGTH}\" placeholder=\"Add a comment...\" class=\"flex-1 resize-none text-sm outline-none\" required{disabled_attr}></textarea>
                <button type=\"submit\" class=\"text-sm font-semibold text-sky-500 disabled:opacity-40\"{disabled_attr}>Post</button>
            </div>
            {error_html}
        </form>
        """
    )


def create_post_form(*, caption: str = "", error: str | None = None) -> Markup:
    """Multipart upload form for ``POST /posts``.

    The image picker advertises the accepted types and size limit; the caption
    counter starts from the length of ``caption`` so a re-rendered form keeps it.
    """

    accept = ",".join(ALLOWED_IMAGE_TYPES)
    error_html = (
        f"<p class=\"create-post-error text-sm text-rose-500\" role=\"alert\">{escape(error)}</p>"
        if error
        else "<p class=\"create-post-error hidden text-sm text-rose-500\" role=\"alert\"></p>"
    )
    return Markup(
        f"""
        <form class=\"create-post-form flex flex-col gap-3 rounded-lg border border-slate-200 bg-white p-4\" action=\"/posts\" method=\"post\" enctype=\"multipart/form-data\">
            <h2 class=\"text-base font-semibold\">Create new post</h2>
            <label class=\"flex cursor-pointer flex-col items-center gap-2 rounded-md border border-dashed border-slate-300 p-6 text-sm text-slate-500\">
                <img class=\"create-post-preview hidden max-h-80 w-full object-contain\" alt=\"Selected image preview\">
                <span>Select a JPEG, PNG or WebP image up to {MAX_IMAGE_BYTES // (1024 * 1024)}MB</span>
                <input type=\"file\" name=\"image\" accept=\"{escape(accept)}\" data-max-bytes=\"{MAX_IMAGE_BYTES}\" class=\"sr-only\" required>
            </label>
            <textarea name=\"caption\" rows=\"3\" maxlength=\"{MAX_CAPTION_LENGTH}\" placeholder=\"Write a caption...\" class=\"resize-none text-sm outline-none\">{escape(caption)}</textarea>
            <div class=\"flex items-center justify-between\">
                <span class=\"caption-counter text-xs text-slate-400\">{len(caption)}/{MAX_CAPTION_LENGTH}</span>
                <button type=\"submit\" class=\"rounded-md bg-sky-500 px-4 py-1.5 text-sm font-semibold text-white disabled:opacity-40\">Share</button>
            </div>
            {error_html}
        </form>
        """
    )


def post_modal(
    post: Mapping[str, Any] | None,
    *,
    loading: bool = False,
    error: str | None = None,
    viewer_external_id: str | None = None,
) -> Markup:
    """Render a post with every comment, oldest first."""

    if loading:
        body = loading_spinner()
    elif error or post is None:
        body = error_state(error or "This post could not be loaded.", retry_href="/")
    else:
        author = post["user"]
        is_owner = viewer_external_id is not None and author["external_id"] == viewer_external_id
        comments = post.get("comments") or []
        if comments:
            comments_html = "".join(
                comment_item(
                    comment,
                    can_delete=viewer_external_id is not None and comment["user"]["external_id"] == viewer_external_id,
                    show_time=True,
                )
                for comment in comments
            )
        else:
            comments_html = "<p class=\"no-comments text-sm text-slate-400\">No comments yet.</p>"

        caption_html = ""
        if post.get("caption"):
            caption_html = (
                f"<p class=\"caption text-sm\"><span class=\"mr-1 font-semibold\">{escape(author['name'])}</span>"
                f"<span class=\"whitespace-pre-line\">{escape(post['caption'])}</span></p>"
            )
        delete_html = (
            f"<button type=\"button\" class=\"post-delete text-sm text-rose-500\" data-post-id=\"{escape(str(post['id']))}\">Delete</button>"
            if is_owner
            else ""
        )
        likes_text = likes_label(int(post.get("likes_count", 0))) or "Be the first to like this"
        viewer_controls = (
            comment_form(post["id"])
            if viewer_external_id
            else "<p class=\"sign-in-hint border-t border-slate-200 px-4 py-3 text-sm text-slate-400\">Sign in to comment.</p>"
        )
        body = f"""
            <div class=\"flex min-h-0 flex-1 flex-col md:flex-row\">
                <div class=\"flex items-center justify-center bg-black md:w-1/2\">
                    <img src=\"{escape(post['image_url'])}\" alt=\"{escape(post.get('caption') or 'Post by ' + author['name'])}\" class=\"max-h-[80vh] w-full object-contain\">
                </div>
                <div class=\"flex flex-col md:w-1/2\">
                    <header class=\"flex items-center justify-between border-b border-slate-200 px-4 py-3\">
                        <a href=\"/profile/{escape(author['external_id'])}\" class=\"font-semibold\">{escape(author['name'])}</a>
                        {delete_html}
                    </header>
                    <div class=\"comment-list flex-1 space-y-3 overflow-y-auto px-4 py-3\">
                        {caption_html}
                        {comments_html}
                    </div>
                    <div class=\"flex items-center gap-4 border-t border-slate-200 px-4 py-2\">
                        {like_button(post_id=post['id'], liked=bool(post.get('is_liked')), count=int(post.get('likes_count', 0)), disabled=viewer_external_id is None)}
                    </div>
                    <div class=\"px-4 pb-2 text-sm font-semibold\">{escape(likes_text)}</div>
                    <time class=\"px-4 pb-2 text-xs uppercase text-slate-400\">{escape(format_relative_time(post['created_at']))}</time>
                    {viewer_controls}
                </div>
            </div>
        """

    return Markup(
        f"""
        <div class=\"post-modal flex max-h-[90vh] w-full max-w-4xl flex-col overflow-hidden rounded-lg bg-white\" role=\"dialog\" aria-modal=\"true\">
            {body}
        </div>
        """
    )


__all__ = ["comment_form", "create_post_form", "post_modal"]
