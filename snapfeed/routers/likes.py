"""Like API routes; adding an existing like is a successful no-op."""
from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database import get_session
from ..schemas import LikeRequest, LikeResponse
from ..services import get_identity_subject, like_post, resolve_current_user, unlike_post

router = APIRouter(prefix="/likes", tags=["likes"])


@router.post("", response_model=LikeResponse)
async def like_endpoint(
    payload: LikeRequest,
    subject: str = Depends(get_identity_subject),
    db: Session = Depends(get_session),
) -> LikeResponse:
    user = resolve_current_user(db, subject)
    like_post(db, post_id=payload.post_id, user=user)
    return LikeResponse(liked=True)


@router.delete("", response_model=LikeResponse)
async def unlike_endpoint(
    payload: LikeRequest,
    subject: str = Depends(get_identity_subject),
    db: Session = Depends(get_session),
) -> LikeResponse:
    user = resolve_current_user(db, subject)
    unlike_post(db, post_id=payload.post_id, user=user)
    return LikeResponse(liked=False)
