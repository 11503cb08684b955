"""Resolution of callers asserted by the external identity provider.

The provider issues signed bearer JWTs whose ``sub`` claim is the caller's
external identity id. This module verifies those tokens and maps the subject
onto the application's own :class:`~snapfeed.models.User` record.
"""
from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Any, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from sqlalchemy import select
from sqlalchemy.orm import Session

from ..config import get_settings
from ..database import get_session
from ..models import User
from ..security.secrets import MIN_SIGNING_KEY_LENGTH, MissingSecretError, require_secret

logger = logging.getLogger(__name__)

_security = HTTPBearer(auto_error=False)

DEFAULT_TOKEN_MINUTES = 60


@lru_cache(maxsize=1)
def _get_verification_key() -> str:
    try:
        return require_secret("IDENTITY_JWT_SECRET", min_length=MIN_SIGNING_KEY_LENGTH)
    except MissingSecretError as exc:
        raise RuntimeError(str(exc)) from exc


def issue_identity_token(
    subject: str,
    *,
    expires_minutes: Optional[int] = None,
    extra_claims: dict[str, Any] | None = None,
) -> str:
    """Sign a token the way the identity provider does (local development and tests)."""

    settings = get_settings()
    now = datetime.now(timezone.utc)
    payload: dict[str, Any] = {
        "sub": subject,
        "iat": now,
        "exp": now + timedelta(minutes=expires_minutes or DEFAULT_TOKEN_MINUTES),
    }
    if settings.identity_jwt_audience:
        payload["aud"] = settings.identity_jwt_audience
    if settings.identity_jwt_issuer:
        payload["iss"] = settings.identity_jwt_issuer
    if extra_claims:
        payload.update(extra_claims)
    return jwt.encode(payload, _get_verification_key(), algorithm=settings.identity_jwt_algorithm)


def decode_identity_token(token: str) -> str:
    """Verify ``token`` and return its external identity subject."""

    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            _get_verification_key(),
            algorithms=[settings.identity_jwt_algorithm],
            audience=settings.identity_jwt_audience,
            issuer=settings.identity_jwt_issuer,
            options={"verify_aud": settings.identity_jwt_audience is not None},
        )
    except JWTError as exc:
        logger.info("Rejected identity token: %s", exc)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token") from exc

    subject = payload.get("sub")
    if not isinstance(subject, str) or not subject.strip():
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token payload")
    return subject.strip()


async def get_identity_subject(
    credentials: HTTPAuthorizationCredentials | None = Depends(_security),
) -> str:
    """Return the authenticated external identity id or reject with 401."""

    if not credentials or credentials.scheme.lower() != "bearer":
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Authentication required")
    return decode_identity_token(credentials.credentials)


async def get_optional_subject(
    credentials: HTTPAuthorizationCredentials | None = Depends(_security),
) -> str | None:
    """Return the external identity id when a valid bearer token is supplied."""

    if not credentials or credentials.scheme.lower() != "bearer":
        return None
    try:
        return decode_identity_token(credentials.credentials)
    except HTTPException:
        return None


def find_user_by_external_id(db: Session, external_id: str) -> User | None:
    return db.scalar(select(User).where(User.external_id == external_id))


def resolve_current_user(db: Session, subject: str) -> User:
    """Map an authenticated subject onto its internal record."""

    user = find_user_by_external_id(db, subject)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


async def get_current_user(
    subject: str = Depends(get_identity_subject),
    db: Session = Depends(get_session),
) -> User:
    """Dependency resolving the caller's :class:`User` (401 when anonymous, 404 when not synced)."""

    return resolve_current_user(db, subject)


async def get_optional_user(
    subject: str | None = Depends(get_optional_subject),
    db: Session = Depends(get_session),
) -> User | None:
    if subject is None:
        return None
    return find_user_by_external_id(db, subject)


__all__ = [
    "issue_identity_token",
    "decode_identity_token",
    "get_identity_subject",
    "get_optional_subject",
    "find_user_by_external_id",
    "resolve_current_user",
    "get_current_user",
    "get_optional_user",
]
