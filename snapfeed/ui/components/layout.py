"""Layout building blocks shared across pages."""
from __future__ import annotations

from markupsafe import Markup, escape

NAV_LINKS = (
    ("Feed", "/"),
)


def navbar(*, active: str | None = None, viewer_external_id: str | None = None) -> Markup:
    links = list(NAV_LINKS)
    if viewer_external_id:
        links.append(("Profile", f"/profile/{viewer_external_id}"))

    links_html: list[str] = []
    for label, href in links:
        text_class = "text-slate-900" if active == href else "text-slate-500"
        links_html.append(
            f"<a href=\"{escape(href)}\" class=\"rounded-full px-4 py-2 text-sm font-medium transition hover:text-slate-900 {text_class}\">{label}</a>"
        )

    return Markup(
        f"""
        <header class=\"sticky top-0 z-40 border-b border-slate-200 bg-white/95 backdrop-blur\">
            <div class=\"mx-auto flex max-w-5xl items-center justify-between gap-3 px-4 py-3\">
                <a href=\"/\" class=\"text-lg font-semibold text-slate-900\">Snapfeed</a>
                <nav class=\"flex items-center gap-1\">{"".join(links_html)}</nav>
            </div>
        </header>
        """
    )


__all__ = ["navbar", "NAV_LINKS"]
