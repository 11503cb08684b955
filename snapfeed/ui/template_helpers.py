"""Utilities for rendering UI templates with shared context."""
from __future__ import annotations

from pathlib import Path
from typing import Any

from fastapi import Request
from fastapi.templating import Jinja2Templates

from . import components

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

_BASE_COMPONENTS = {
    "cards": components.cards,
    "feed": components.feed,
    "feedback": components.feedback,
    "layout": components.layout,
    "modal": components.modal,
    "profile": components.profile,
}


def render_template(
    request: Request,
    template_name: str,
    context: dict[str, Any] | None = None,
    *,
    status_code: int = 200,
):
    """Return a TemplateResponse with the shared UI context."""

    base_context: dict[str, Any] = {
        "app_name": "Snapfeed",
        "components": _BASE_COMPONENTS,
        "active_nav": None,
        "page_title": "",
        "viewer_external_id": None,
    }
    if context:
        base_context.update(context)

    return templates.TemplateResponse(request, template_name, base_context, status_code=status_code)


__all__ = ["render_template", "templates", "TEMPLATES_DIR"]
