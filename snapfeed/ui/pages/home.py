"""Home/feed page surface."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import HTMLResponse
from sqlalchemy.orm import Session

from ...config import get_settings
from ...database import get_session
from ...services import find_user_by_external_id, get_optional_subject, list_posts
from ..formatting import parse_page
from ..template_helpers import render_template

router = APIRouter()

logger = logging.getLogger(__name__)

INVALID_PAGE_MESSAGE = "page must be a positive integer"


@router.get("/", response_class=HTMLResponse)
async def feed(
    request: Request,
    page: str | None = Query(None),
    db: Session = Depends(get_session),
    subject: str | None = Depends(get_optional_subject),
) -> HTMLResponse:
    """Render one page of the feed, newest first."""

    viewer = find_user_by_external_id(db, subject) if subject else None
    context = {
        "page_title": "Feed",
        "active_nav": "/",
        "viewer_external_id": subject,
        "show_create_form": viewer is not None,
        "posts": [],
        "page": 1,
        "has_more": False,
        "error": None,
    }

    page_number = parse_page(page)
    if page_number is None:
        logger.info("Feed page %r rejected", page)
        context["error"] = INVALID_PAGE_MESSAGE
        return render_template(request, "home.html", context, status_code=400)

    context["page"] = page_number
    try:
        posts, has_more = list_posts(
            db,
            page=page_number,
            page_size=get_settings().posts_per_page,
            viewer_id=viewer.id if viewer else None,
        )
    except HTTPException as exc:
        logger.info("Feed page %s failed: %s", page_number, exc.detail)
        context["error"] = str(exc.detail)
        return render_template(request, "home.html", context, status_code=exc.status_code)

    context.update(posts=posts, has_more=has_more)
    return render_template(request, "home.html", context)
