"""System-level routes."""
from __future__ import annotations

from fastapi import APIRouter

from ..config import get_settings

router = APIRouter(tags=["system"])


@router.get("/health")
async def healthcheck() -> dict[str, str]:
    """Liveness probe reporting the service name and version."""

    settings = get_settings()
    return {"status": "ok", "service": settings.app_name, "version": settings.api_version}
