"""Credential lookups for the identity signing key and object storage keys.

Values are read from the environment on demand and never logged. Error
messages name the variable, not its contents.
"""
from __future__ import annotations

import os
from typing import Final, NamedTuple

__all__ = [
    "MissingSecretError",
    "StorageKeyPair",
    "MIN_SIGNING_KEY_LENGTH",
    "is_placeholder",
    "require_secret",
    "storage_key_pair",
]

MIN_SIGNING_KEY_LENGTH: Final[int] = 16

_PLACEHOLDER_VALUES: Final[frozenset[str]] = frozenset(
    {
        "changeme",
        "change-me",
        "placeholder",
        "example",
        "your-key-here",
        "your-secret-here",
    }
)


class MissingSecretError(RuntimeError):
    """Raised when a credential is absent, left as a placeholder or malformed."""


class StorageKeyPair(NamedTuple):
    access_key: str
    secret_key: str


def is_placeholder(value: str | None) -> bool:
    if not value:
        return True
    normalized = value.strip().lower()
    return not normalized or normalized in _PLACEHOLDER_VALUES


def _read(name: str) -> str | None:
    value = os.getenv(name)
    return None if is_placeholder(value) else value.strip()


def require_secret(name: str, *, min_length: int = 1) -> str:
    """Return the trimmed value of ``name``; reject unset, placeholder or too-short values."""

    value = _read(name)
    if value is None:
        raise MissingSecretError(f"Environment variable {name} is required and must not use placeholder defaults")
    if len(value) < min_length:
        raise MissingSecretError(f"Environment variable {name} must be at least {min_length} characters long")
    return value


def storage_key_pair(
    access_name: str = "STORAGE_ACCESS_KEY",
    secret_name: str = "STORAGE_SECRET_KEY",
) -> StorageKeyPair | None:
    """Return explicit storage keys, or ``None`` to defer to boto3's credential chain.

    Setting only one of the two variables is a configuration error.
    """

    access_key = _read(access_name)
    secret_key = _read(secret_name)
    if access_key is None and secret_key is None:
        return None
    if access_key is None or secret_key is None:
        missing = access_name if access_key is None else secret_name
        raise MissingSecretError(f"Environment variable {missing} must be set together with its pair")
    return StorageKeyPair(access_key, secret_key)
