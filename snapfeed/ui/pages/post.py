"""Post detail page."""
from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import HTMLResponse
from sqlalchemy.orm import Session

from ...database import get_session
from ...services import find_user_by_external_id, get_optional_subject, get_post_detail
from ..template_helpers import render_template

router = APIRouter()


@router.get("/post/{post_id}", response_class=HTMLResponse)
async def post_detail(
    request: Request,
    post_id: UUID,
    db: Session = Depends(get_session),
    subject: str | None = Depends(get_optional_subject),
) -> HTMLResponse:
    viewer = find_user_by_external_id(db, subject) if subject else None
    context = {
        "page_title": "Post",
        "viewer_external_id": subject,
        "post": None,
        "error": None,
        "commenter_external_id": None,
    }
    try:
        post = get_post_detail(db, post_id=post_id, viewer_id=viewer.id if viewer else None)
    except HTTPException as exc:
        context["error"] = str(exc.detail)
        return render_template(request, "post.html", context, status_code=exc.status_code)

    context.update(
        page_title=f"Post by {post['user']['name']}",
        post=post,
        # Only synced users can comment or delete.
        commenter_external_id=subject if viewer else None,
    )
    return render_template(request, "post.html", context)
