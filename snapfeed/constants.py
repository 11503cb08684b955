"""Project-wide constant values."""
from __future__ import annotations

MAX_CAPTION_LENGTH = 2200
MAX_COMMENT_LENGTH = 2200
MAX_NAME_LENGTH = 150

MAX_IMAGE_BYTES = 5 * 1024 * 1024  # 5MB
ALLOWED_IMAGE_TYPES: tuple[str, ...] = ("image/jpeg", "image/jpg", "image/png", "image/webp")

COMMENT_PREVIEW_LIMIT = 2
UPLOAD_FOLDER = "uploads"

__all__ = [
    "MAX_CAPTION_LENGTH",
    "MAX_COMMENT_LENGTH",
    "MAX_NAME_LENGTH",
    "MAX_IMAGE_BYTES",
    "ALLOWED_IMAGE_TYPES",
    "COMMENT_PREVIEW_LIMIT",
    "UPLOAD_FOLDER",
]
