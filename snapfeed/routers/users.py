"""User profile routes."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from ..database import get_session
from ..schemas import UserProfileResponse, UserSummary, UserSyncRequest, UserSyncResponse
from ..services import get_identity_subject, get_optional_subject, get_profile, sync_user

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/sync", response_model=UserSyncResponse)
async def sync_user_endpoint(
    payload: UserSyncRequest,
    response: Response,
    subject: str = Depends(get_identity_subject),
    db: Session = Depends(get_session),
) -> UserSyncResponse:
    """Bind the caller's identity subject to an application user record."""

    user, created = sync_user(db, external_id=subject, name=payload.name)
    if created:
        response.status_code = status.HTTP_201_CREATED
    return UserSyncResponse(user=UserSummary.model_validate(user), created=created)


@router.get("/{external_id}", response_model=UserProfileResponse)
async def profile_endpoint(
    external_id: str,
    db: Session = Depends(get_session),
    viewer_subject: str | None = Depends(get_optional_subject),
) -> UserProfileResponse:
    return UserProfileResponse(**get_profile(db, external_id=external_id, viewer_external_id=viewer_subject))
