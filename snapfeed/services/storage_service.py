"""S3-compatible object storage helpers for uploaded post images."""
from __future__ import annotations

import logging
import re
import uuid
from dataclasses import dataclass
from functools import lru_cache
from io import BytesIO
from pathlib import Path
from typing import Iterable

from boto3.session import Session
from botocore.client import BaseClient
from botocore.exceptions import BotoCoreError, ClientError
from fastapi.concurrency import run_in_threadpool

from ..config import get_settings
from ..constants import UPLOAD_FOLDER
from ..security.secrets import MissingSecretError, is_placeholder, storage_key_pair

logger = logging.getLogger(__name__)

_CONTENT_TYPE_EXTENSIONS = {
    "image/jpeg": ".jpg",
    "image/jpg": ".jpg",
    "image/png": ".png",
    "image/webp": ".webp",
}


@dataclass(frozen=True)
class StorageConfig:
    """Runtime configuration extracted from settings and the environment."""

    bucket: str
    public_base_url: str
    endpoint_url: str | None = None
    region: str | None = None
    access_key: str | None = None
    secret_key: str | None = None


@dataclass(frozen=True)
class StorageUploadResult:
    """Metadata returned after storing an object."""

    url: str
    key: str
    bucket: str
    content_type: str


class StorageConfigurationError(RuntimeError):
    """Raised when object storage settings are missing or invalid."""


class StorageUploadError(RuntimeError):
    """Raised when an upload to object storage fails."""


class StorageDeletionError(RuntimeError):
    """Raised when deleting an object from storage fails."""


@lru_cache(maxsize=1)
def load_storage_config() -> StorageConfig:
    """Read and validate object storage configuration."""

    settings = get_settings()
    bucket = (settings.storage_bucket or "").strip()
    if is_placeholder(bucket):
        raise StorageConfigurationError("STORAGE_BUCKET must be set to the target bucket name")

    endpoint = (settings.storage_endpoint_url or "").strip().rstrip("/") or None
    region = (settings.storage_region or "").strip() or None

    public_base = (settings.storage_public_base_url or "").strip().rstrip("/")
    if not public_base:
        if endpoint:
            public_base = f"{endpoint}/{bucket}"
        elif region:
            public_base = f"https://{bucket}.s3.{region}.amazonaws.com"
        else:
            raise StorageConfigurationError(
                "Set STORAGE_PUBLIC_BASE_URL, STORAGE_ENDPOINT_URL or STORAGE_REGION to locate stored images"
            )

    try:
        keys = storage_key_pair()
    except MissingSecretError as exc:
        raise StorageConfigurationError(str(exc)) from exc

    return StorageConfig(
        bucket=bucket,
        public_base_url=public_base,
        endpoint_url=endpoint,
        region=region,
        access_key=keys.access_key if keys else None,
        secret_key=keys.secret_key if keys else None,
    )


@lru_cache(maxsize=1)
def get_storage_client() -> BaseClient:
    """Create a singleton boto3 S3 client."""

    config = load_storage_config()
    session = Session()
    return session.client(
        "s3",
        region_name=config.region,
        endpoint_url=config.endpoint_url,
        aws_access_key_id=config.access_key,
        aws_secret_access_key=config.secret_key,
    )


def _sanitize_segments(parts: Iterable[str]) -> list[str]:
    """Sanitize path segments to be safe for object keys."""

    sanitized: list[str] = []
    for part in parts:
        if part in {"", ".", ".."}:
            continue
        cleaned = re.sub(r"[^A-Za-z0-9._-]", "-", part.strip())
        cleaned = re.sub(r"-+", "-", cleaned).strip("-._")
        if cleaned:
            sanitized.append(cleaned)
    return sanitized


def object_key(filename: str | None, *, owner: str, content_type: str | None = None, folder: str = UPLOAD_FOLDER) -> str:
    """Build ``<folder>/<owner>/<random><ext>`` for a new upload."""

    extension = Path(filename or "").suffix.lower()
    if not re.fullmatch(r"\.[a-z0-9]{1,10}", extension):
        extension = _CONTENT_TYPE_EXTENSIONS.get((content_type or "").lower(), "")

    segments = _sanitize_segments([*folder.replace("\\", "/").split("/"), owner])
    prefix = "/".join(segments) or UPLOAD_FOLDER
    return f"{prefix}/{uuid.uuid4().hex}{extension}"


def build_public_url(key: str) -> str:
    """Build the public URL for a stored object."""

    config = load_storage_config()
    normalized_key = key.lstrip("/")
    return f"{config.public_base_url}/{normalized_key}" if normalized_key else config.public_base_url


def extract_object_key(url: str | None) -> str | None:
    """Return the object key behind a public URL, or ``None`` for foreign URLs."""

    if not url:
        return None
    prefix = load_storage_config().public_base_url + "/"
    if not url.startswith(prefix):
        return None
    key = url[len(prefix):].split("?", 1)[0].strip("/")
    return key or None


async def upload_image(
    data: bytes,
    *,
    owner: str,
    filename: str | None,
    content_type: str,
    client: BaseClient | None = None,
) -> StorageUploadResult:
    """Store ``data`` publicly and return its URL and key."""

    config = load_storage_config()
    s3_client = client or get_storage_client()
    key = object_key(filename, owner=owner, content_type=content_type)

    def _upload() -> None:
        try:
            s3_client.upload_fileobj(
                BytesIO(data),
                config.bucket,
                key,
                ExtraArgs={"ContentType": content_type},
            )
        except (ClientError, BotoCoreError) as exc:  # pragma: no cover - network errors hard to reproduce
            logger.exception("Upload of %s to bucket %s failed", key, config.bucket)
            raise StorageUploadError("Image upload failed") from exc

    await run_in_threadpool(_upload)
    logger.info("Stored image %s (%d bytes)", key, len(data))
    return StorageUploadResult(url=build_public_url(key), key=key, bucket=config.bucket, content_type=content_type)


def delete_object(key: str, *, client: BaseClient | None = None) -> None:
    """Remove an object from storage."""

    if not key:
        return

    config = load_storage_config()
    normalized_key = key.lstrip("/")
    s3_client = client or get_storage_client()

    try:
        s3_client.delete_object(Bucket=config.bucket, Key=normalized_key)
    except (ClientError, BotoCoreError) as exc:  # pragma: no cover - network bound
        raise StorageDeletionError(f"Unable to delete {normalized_key} from storage") from exc


async def delete_object_quietly(key: str | None) -> bool:
    """Best-effort deletion: failures are logged and reported as ``False``."""

    if not key:
        return False
    try:
        await run_in_threadpool(delete_object, key)
    except (StorageDeletionError, StorageConfigurationError, BotoCoreError):
        logger.exception("Best-effort deletion of stored object %s failed", key)
        return False
    logger.info("Deleted stored object %s", key)
    return True


async def delete_public_url_quietly(url: str | None) -> bool:
    """Best-effort deletion of the object behind a public URL we issued."""

    try:
        key = extract_object_key(url)
    except StorageConfigurationError:
        logger.exception("Cannot resolve stored object for %s", url)
        return False
    if key is None:
        logger.info("Skipping deletion of foreign image url %s", url)
        return False
    return await delete_object_quietly(key)


__all__ = [
    "StorageConfig",
    "StorageConfigurationError",
    "StorageDeletionError",
    "StorageUploadError",
    "StorageUploadResult",
    "build_public_url",
    "delete_object",
    "delete_object_quietly",
    "delete_public_url_quietly",
    "extract_object_key",
    "get_storage_client",
    "load_storage_config",
    "object_key",
    "upload_image",
]
