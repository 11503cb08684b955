"""Shared fixtures: SQLite schema, identity tokens, factories and a storage stand-in."""
from __future__ import annotations

import os
from datetime import datetime
from typing import Callable, Iterator
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import delete

# Ensure the database URL and identity secret are available before importing application modules.
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///./test_snapfeed.db")
os.environ.setdefault("IDENTITY_JWT_SECRET", "test-identity-secret")
os.environ.setdefault("STORAGE_BUCKET", "snapfeed-test")
os.environ.setdefault("STORAGE_PUBLIC_BASE_URL", "https://cdn.example.test/snapfeed-test")

from snapfeed.database import Base, SessionLocal, engine  # noqa: E402
from snapfeed.main import app  # noqa: E402
from snapfeed.models import Comment, Follow, Like, Post, User  # noqa: E402
from snapfeed.services import issue_identity_token, post_service, storage_service  # noqa: E402
from snapfeed.services.storage_service import StorageUploadResult  # noqa: E402

PUBLIC_BASE = os.environ["STORAGE_PUBLIC_BASE_URL"]


def _wipe() -> None:
    with SessionLocal() as session:
        session.execute(delete(Follow))
        session.execute(delete(Like))
        session.execute(delete(Comment))
        session.execute(delete(Post))
        session.execute(delete(User))
        session.commit()


@pytest.fixture(scope="session", autouse=True)
def _create_schema() -> Iterator[None]:
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def _clean_database() -> Iterator[None]:
    """Remove persisted rows and cached storage configuration between tests."""

    _wipe()
    storage_service.load_storage_config.cache_clear()
    storage_service.get_storage_client.cache_clear()
    yield
    _wipe()


@pytest.fixture
def client() -> Iterator[TestClient]:
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def user_factory() -> Callable[..., User]:
    def _factory(name: str = "tester", external_id: str | None = None) -> User:
        with SessionLocal() as session:
            user = User(external_id=external_id or f"user_{uuid4().hex[:10]}", name=name)
            session.add(user)
            session.commit()
            session.refresh(user)
            return user
    return _factory


@pytest.fixture
def post_factory() -> Callable[..., Post]:
    def _factory(user: User, *, caption: str | None = "caption", created_at: datetime | None = None) -> Post:
        with SessionLocal() as session:
            post = Post(
                user_id=user.id,
                image_url=f"{PUBLIC_BASE}/uploads/{user.external_id}/{uuid4().hex}.jpg",
                caption=caption,
            )
            if created_at is not None:
                post.created_at = created_at
                post.updated_at = created_at
            session.add(post)
            session.commit()
            session.refresh(post)
            return post
    return _factory


@pytest.fixture
def comment_factory() -> Callable[..., Comment]:
    def _factory(post: Post, user: User, content: str, *, created_at: datetime | None = None) -> Comment:
        with SessionLocal() as session:
            comment = Comment(post_id=post.id, user_id=user.id, content=content)
            if created_at is not None:
                comment.created_at = created_at
                comment.updated_at = created_at
            session.add(comment)
            session.commit()
            session.refresh(comment)
            return comment
    return _factory


@pytest.fixture
def auth_headers() -> Callable[[User | str], dict[str, str]]:
    def _headers(user_or_subject: User | str) -> dict[str, str]:
        subject = user_or_subject if isinstance(user_or_subject, str) else user_or_subject.external_id
        return {"Authorization": f"Bearer {issue_identity_token(subject)}"}
    return _headers


@pytest.fixture
def fake_storage(monkeypatch) -> dict[str, list]:
    """Replace object storage calls made by the post service with recorders."""

    calls: dict[str, list] = {"uploads": [], "deleted_keys": [], "deleted_urls": []}

    async def _fake_upload(data: bytes, *, owner: str, filename: str | None, content_type: str, client=None):
        key = storage_service.object_key(filename, owner=owner, content_type=content_type)
        calls["uploads"].append({"key": key, "size": len(data), "content_type": content_type})
        return StorageUploadResult(url=f"{PUBLIC_BASE}/{key}", key=key, bucket="snapfeed-test", content_type=content_type)

    async def _fake_delete_key(key: str | None) -> bool:
        calls["deleted_keys"].append(key)
        return True

    async def _fake_delete_url(url: str | None) -> bool:
        calls["deleted_urls"].append(url)
        return True

    monkeypatch.setattr(post_service, "upload_image", _fake_upload)
    monkeypatch.setattr(post_service, "delete_object_quietly", _fake_delete_key)
    monkeypatch.setattr(post_service, "delete_public_url_quietly", _fake_delete_url)
    return calls
