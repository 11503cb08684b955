"""Comment API routes."""
from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..database import get_session
from ..schemas import CommentCreate, CommentCreatedResponse, CommentDeleteResponse, CommentResponse
from ..services import create_comment, delete_comment, get_identity_subject, resolve_current_user

router = APIRouter(prefix="/comments", tags=["comments"])


@router.post("", response_model=CommentCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_comment_endpoint(
    payload: CommentCreate,
    subject: str = Depends(get_identity_subject),
    db: Session = Depends(get_session),
) -> CommentCreatedResponse:
    author = resolve_current_user(db, subject)
    comment = create_comment(db, post_id=payload.post_id, author=author, content=payload.content)
    return CommentCreatedResponse(comment=CommentResponse(**comment))


@router.delete("/{comment_id}", response_model=CommentDeleteResponse)
async def delete_comment_endpoint(
    comment_id: UUID,
    subject: str = Depends(get_identity_subject),
    db: Session = Depends(get_session),
) -> CommentDeleteResponse:
    requester = resolve_current_user(db, subject)
    post_id = delete_comment(db, comment_id=comment_id, requester=requester)
    return CommentDeleteResponse(comment_id=comment_id, post_id=post_id)
