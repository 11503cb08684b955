"""Feedback elements: loaders, skeletons, error and empty states."""
from __future__ import annotations

from markupsafe import Markup, escape


def loading_spinner(*, label: str = "Loading") -> Markup:
    return Markup(
        f"""
        <div class=\"flex items-center gap-3 text-sm text-slate-500\" role=\"status\">
            <span class=\"inline-block h-3 w-3 animate-spin rounded-full border-2 border-sky-500 border-t-transparent\"></span>
            <span>{escape(label)}…</span>
        </div>
        """
    )


def post_card_skeleton() -> Markup:
    """Placeholder with the same header/image/actions/content layout as a post card."""

    bar = "rounded bg-slate-200 animate-pulse"
    return Markup(
        f"""
        <div class=\"post-card-skeleton rounded-lg border border-slate-200 bg-white\" aria-hidden=\"true\">
            <div class=\"flex h-[60px] items-center gap-3 border-b border-slate-200 px-4\">
                <div class=\"h-8 w-8 rounded-full bg-slate-200 animate-pulse\"></div>
                <div class=\"h-4 w-24 {bar}\"></div>
            </div>
            <div class=\"aspect-square w-full bg-slate-200 animate-pulse\"></div>
            <div class=\"flex h-[48px] items-center gap-4 px-4\">
                <div class=\"h-6 w-6 {bar}\"></div>
                <div class=\"h-6 w-6 {bar}\"></div>
            </div>
            <div class=\"space-y-2 px-4 pb-4\">
                <div class=\"h-4 w-20 {bar}\"></div>
                <div class=\"h-4 w-full {bar}\"></div>
                <div class=\"h-4 w-3/4 {bar}\"></div>
            </div>
        </div>
        """
    )


def grid_skeleton(*, count: int = 9) -> Markup:
    tiles = "".join(
        "<div class=\"grid-skeleton-tile aspect-square bg-slate-200 animate-pulse\"></div>" for _ in range(count)
    )
    return Markup(f"<div class=\"grid grid-cols-3 gap-1 md:gap-4\" aria-hidden=\"true\">{tiles}</div>")


def error_state(message: str, *, retry_href: str | None = None) -> Markup:
    retry = (
        f"<a href=\"{escape(retry_href)}\" class=\"retry-link rounded-lg bg-sky-500 px-4 py-2 text-sm font-semibold text-white\">Try again</a>"
        if retry_href
        else ""
    )
    return Markup(
        f"""
        <div class=\"error-state flex flex-col items-center gap-4 rounded-lg border border-slate-200 bg-white p-8 text-center\" role=\"alert\">
            <p class=\"text-slate-700\">{escape(message)}</p>
            {retry}
        </div>
        """
    )


def empty_state(title: str, *, hint: str | None = None) -> Markup:
    hint_html = f"<p class=\"mt-2 text-sm text-slate-500\">{escape(hint)}</p>" if hint else ""
    return Markup(
        f"""
        <div class=\"empty-state rounded-lg border border-slate-200 bg-white p-8 text-center\">
            <p class=\"text-slate-800\">{escape(title)}</p>
            {hint_html}
        </div>
        """
    )


__all__ = ["empty_state", "error_state", "grid_skeleton", "loading_spinner", "post_card_skeleton"]
