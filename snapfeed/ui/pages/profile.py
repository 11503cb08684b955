"""Profile page: header plus the user's post grid."""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import HTMLResponse
from sqlalchemy.orm import Session

from ...config import get_settings
from ...database import get_session
from ...services import find_user_by_external_id, get_optional_subject, get_profile, list_posts
from ..formatting import parse_page
from ..template_helpers import render_template
from .home import INVALID_PAGE_MESSAGE

router = APIRouter()


@router.get("/profile/{user_id}", response_class=HTMLResponse)
async def profile(
    request: Request,
    user_id: str,
    page: str | None = Query(None),
    db: Session = Depends(get_session),
    subject: str | None = Depends(get_optional_subject),
) -> HTMLResponse:
    context = {"page_title": "Profile", "viewer_external_id": subject, "profile": None, "error": None}
    try:
        details = get_profile(db, external_id=user_id, viewer_external_id=subject)
    except HTTPException as exc:
        context["error"] = str(exc.detail)
        return render_template(request, "profile.html", context, status_code=exc.status_code)

    viewer = find_user_by_external_id(db, subject) if subject else None
    context.update(
        page_title=details["name"],
        active_nav=f"/profile/{user_id}" if details["is_own_profile"] else None,
        profile=details,
        profile_external_id=user_id,
        viewer_signed_in=viewer is not None,
        posts=[],
        page=1,
        has_more=False,
        grid_error=None,
    )

    page_number = parse_page(page)
    if page_number is None:
        context["grid_error"] = INVALID_PAGE_MESSAGE
        return render_template(request, "profile.html", context, status_code=400)

    context["page"] = page_number
    try:
        posts, has_more = list_posts(
            db,
            page=page_number,
            page_size=get_settings().posts_per_page,
            viewer_id=viewer.id if viewer else None,
            author_id=details["id"],
        )
    except HTTPException as exc:
        context["grid_error"] = str(exc.detail)
        return render_template(request, "profile.html", context, status_code=exc.status_code)

    context.update(posts=posts, has_more=has_more)
    return render_template(request, "profile.html", context)
