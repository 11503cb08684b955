"""Post API routes: paginated feed, detail, upload and deletion."""
from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile, status
from sqlalchemy.orm import Session

from ..config import get_settings
from ..database import get_session
from ..models import User
from ..schemas import PostDeleteResponse, PostListResponse, PostResponse
from ..services import (
    create_post,
    delete_post,
    find_user_by_external_id,
    get_identity_subject,
    get_optional_user,
    get_post_detail,
    list_posts,
    normalize_caption,
    read_image_upload,
    resolve_current_user,
)

router = APIRouter(prefix="/posts", tags=["posts"])

@router.get("", response_model=PostListResponse)
async def list_posts_endpoint(
    page: int = Query(1),
    user_id: str | None = Query(None, description="External identity id of an author to filter by"),
    db: Session = Depends(get_session),
    viewer: User | None = Depends(get_optional_user),
) -> PostListResponse:
    author_id = None
    if user_id:
        author = find_user_by_external_id(db, user_id)
        if author is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
        author_id = author.id

    items, has_more = list_posts(
        db,
        page=page,
        page_size=get_settings().posts_per_page,
        viewer_id=viewer.id if viewer else None,
        author_id=author_id,
    )
    return PostListResponse(posts=[PostResponse(**item) for item in items], has_more=has_more, page=page)

@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post_endpoint(
    image: UploadFile = File(...),
    caption: str | None = Form(None),
    subject: str = Depends(get_identity_subject),
    db: Session = Depends(get_session),
) -> PostResponse:
    """Create a post from a ``multipart/form-data`` upload.

    The image must be JPEG, PNG or WebP and at most 5MB; the optional caption
    is limited to 2200 characters. The image is uploaded before the record is
    inserted and removed again if the insert fails.
    """

    normalized_caption = normalize_caption(caption)
    data = await read_image_upload(image)
    author = resolve_current_user(db, subject)

    post = await create_post(
        db,
        author=author,
        image=data,
        filename=image.filename,
        content_type=(image.content_type or "").strip().lower(),
        caption=normalized_caption,
    )
    return PostResponse(**post)

@router.get("/{post_id}", response_model=PostResponse)
async def post_detail_endpoint(
    post_id: UUID,
    db: Session = Depends(get_session),
    viewer: User | None = Depends(get_optional_user),
) -> PostResponse:
    return PostResponse(**get_post_detail(db, post_id=post_id, viewer_id=viewer.id if viewer else None))

@router.delete("/{post_id}", response_model=PostDeleteResponse)
async def delete_post_endpoint(
    post_id: UUID,
    subject: str = Depends(get_identity_subject),
    db: Session = Depends(get_session),
) -> PostDeleteResponse:
    requester = resolve_current_user(db, subject)
    await delete_post(db, post_id=post_id, requester=requester)
    return PostDeleteResponse()
