"""Convenience exports for service layer."""
from .comment_service import create_comment, delete_comment
from .follow_service import FollowStats, follow_user, get_follow_stats, unfollow_user
from .identity_service import (
    decode_identity_token,
    find_user_by_external_id,
    get_current_user,
    get_identity_subject,
    get_optional_subject,
    get_optional_user,
    issue_identity_token,
    resolve_current_user,
)
from .like_service import like_post, unlike_post
from .post_service import create_post, delete_post, get_post_detail, list_posts, normalize_caption, read_image_upload
from .storage_service import (
    StorageConfigurationError,
    StorageDeletionError,
    StorageUploadError,
    get_storage_client,
    upload_image,
)
from .user_service import get_profile, sync_user

__all__ = [
    "create_comment",
    "delete_comment",
    "FollowStats",
    "follow_user",
    "unfollow_user",
    "get_follow_stats",
    "decode_identity_token",
    "find_user_by_external_id",
    "issue_identity_token",
    "get_identity_subject",
    "get_optional_subject",
    "get_current_user",
    "get_optional_user",
    "resolve_current_user",
    "like_post",
    "unlike_post",
    "create_post",
    "delete_post",
    "get_post_detail",
    "list_posts",
    "normalize_caption",
    "read_image_upload",
    "StorageConfigurationError",
    "StorageDeletionError",
    "StorageUploadError",
    "get_storage_client",
    "upload_image",
    "get_profile",
    "sync_user",
]
