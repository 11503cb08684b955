"""Follow management API routes."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from ..database import get_session
from ..schemas import FollowRecord, FollowRequest, FollowResponse
from ..services import follow_user, get_identity_subject, resolve_current_user, unfollow_user

router = APIRouter(prefix="/follows", tags=["follows"])


@router.post("", response_model=FollowResponse, status_code=status.HTTP_201_CREATED)
async def follow_endpoint(
    payload: FollowRequest,
    response: Response,
    subject: str = Depends(get_identity_subject),
    db: Session = Depends(get_session),
) -> FollowResponse:
    follower = resolve_current_user(db, subject)
    record, created = follow_user(db, follower=follower, target_external_id=payload.following_id)
    if not created:
        response.status_code = status.HTTP_200_OK
    return FollowResponse(follow=FollowRecord.model_validate(record))


@router.delete("", response_model=FollowResponse)
async def unfollow_endpoint(
    payload: FollowRequest,
    subject: str = Depends(get_identity_subject),
    db: Session = Depends(get_session),
) -> FollowResponse:
    follower = resolve_current_user(db, subject)
    unfollow_user(db, follower=follower, target_external_id=payload.following_id)
    return FollowResponse()
