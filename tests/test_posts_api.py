"""Integration tests for the post feed, detail, upload and deletion routes."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from snapfeed.database import SessionLocal
from snapfeed.models import Comment, Like, Post

BASE_TIME = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)
JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"0" * 128


def _at(minutes: int) -> datetime:
    return BASE_TIME + timedelta(minutes=minutes)


def _like(post: Post, user) -> None:
    with SessionLocal() as session:
        session.add(Like(post_id=post.id, user_id=user.id))
        session.commit()


def test_feed_pages_newest_first_with_has_more(client, user_factory, post_factory):
    author = user_factory("author")
    posts = [post_factory(author, caption=f"post {i}", created_at=_at(i)) for i in range(12)]

    first = client.get("/posts", params={"page": 1})
    assert first.status_code == 200
    body = first.json()
    assert body["page"] == 1
    assert body["has_more"] is True
    assert [item["caption"] for item in body["posts"]] == [f"post {i}" for i in range(11, 1, -1)]

    second = client.get("/posts", params={"page": 2}).json()
    assert second["has_more"] is False
    assert [item["id"] for item in second["posts"]] == [str(posts[1].id), str(posts[0].id)]


def test_feed_exact_page_boundary_has_no_more(client, user_factory, post_factory):
    author = user_factory()
    for i in range(10):
        post_factory(author, created_at=_at(i))

    body = client.get("/posts").json()
    assert len(body["posts"]) == 10
    assert body["has_more"] is False


def test_feed_rejects_invalid_pages(client):
    for value in ("0", "-3", "abc"):
        response = client.get("/posts", params={"page": value})
        assert response.status_code == 400
        assert "error" in response.json()


def test_feed_includes_counts_preview_and_viewer_like(client, user_factory, post_factory, comment_factory, auth_headers):
    author = user_factory("author")
    viewer = user_factory("viewer")
    post = post_factory(author, created_at=_at(0))
    for i, text in enumerate(["first", "second", "third"]):
        comment_factory(post, viewer, text, created_at=_at(10 + i))
    _like(post, viewer)

    anonymous = client.get("/posts").json()["posts"][0]
    assert anonymous["likes_count"] == 1
    assert anonymous["comments_count"] == 3
    assert [comment["content"] for comment in anonymous["comments"]] == ["third", "second"]
    assert anonymous["comments"][0]["user"]["name"] == "viewer"
    assert anonymous["is_liked"] is False

    as_viewer = client.get("/posts", headers=auth_headers(viewer)).json()["posts"][0]
    assert as_viewer["is_liked"] is True


def test_feed_filters_by_author_external_id(client, user_factory, post_factory):
    alice = user_factory("alice")
    bob = user_factory("bob")
    post_factory(alice, caption="from alice", created_at=_at(0))
    post_factory(bob, caption="from bob", created_at=_at(1))

    body = client.get("/posts", params={"user_id": alice.external_id}).json()
    assert [item["caption"] for item in body["posts"]] == ["from alice"]

    missing = client.get("/posts", params={"user_id": "nobody"})
    assert missing.status_code == 404
    assert missing.json() == {"error": "User not found"}


def test_post_detail_lists_all_comments_oldest_first(client, user_factory, post_factory, comment_factory):
    author = user_factory()
    post = post_factory(author)
    for i in range(4):
        comment_factory(post, author, f"comment {i}", created_at=_at(i))

    response = client.get(f"/posts/{post.id}")
    assert response.status_code == 200
    body = response.json()
    assert [comment["content"] for comment in body["comments"]] == [f"comment {i}" for i in range(4)]
    assert body["comments_count"] == 4


def test_post_detail_errors(client):
    assert client.get("/posts/3f0c52b4-0a4b-4f0c-9a0e-1b2c3d4e5f60").status_code == 404
    assert client.get("/posts/not-a-uuid").status_code == 400


def test_create_post_uploads_then_persists(client, user_factory, auth_headers, fake_storage):
    author = user_factory("author")

    response = client.post(
        "/posts",
        headers=auth_headers(author),
        files={"image": ("photo.jpg", JPEG_BYTES, "image/jpeg")},
        data={"caption": "  sunset  "},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["caption"] == "sunset"
    assert body["likes_count"] == 0 and body["comments"] == []
    assert body["image_url"].startswith(f"https://cdn.example.test/snapfeed-test/uploads/{author.external_id}/")
    assert body["image_url"].endswith(".jpg")
    assert fake_storage["uploads"][0]["content_type"] == "image/jpeg"

    with SessionLocal() as session:
        assert session.scalar(select(func.count(Post.id))) == 1


def test_create_post_validates_before_resolving_user(client, auth_headers, fake_storage):
    response = client.post(
        "/posts",
        headers=auth_headers("never-synced"),
        files={"image": ("notes.txt", b"hello", "text/plain")},
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Only JPEG, PNG or WebP images are allowed"}

    response = client.post(
        "/posts",
        headers=auth_headers("never-synced"),
        files={"image": ("photo.png", b"\x89PNG", "image/png")},
    )
    assert response.status_code == 404
    assert fake_storage["uploads"] == []


def test_create_post_accepts_image_jpg_alias(client, user_factory, auth_headers, fake_storage):
    author = user_factory("author")

    response = client.post(
        "/posts",
        headers=auth_headers(author),
        files={"image": ("scan", JPEG_BYTES, "image/jpg")},
    )

    assert response.status_code == 201
    assert response.json()["image_url"].endswith(".jpg")
    assert fake_storage["uploads"][0]["content_type"] == "image/jpg"


def test_create_post_requires_authentication(client, fake_storage):
    response = client.post("/posts", files={"image": ("photo.jpg", JPEG_BYTES, "image/jpeg")})
    assert response.status_code == 401
    assert response.json() == {"error": "Authentication required"}


def test_create_post_rejects_long_caption_and_missing_image(client, user_factory, auth_headers, fake_storage):
    author = user_factory()

    too_long = client.post(
        "/posts",
        headers=auth_headers(author),
        files={"image": ("photo.jpg", JPEG_BYTES, "image/jpeg")},
        data={"caption": "x" * 2201},
    )
    assert too_long.status_code == 400

    no_image = client.post("/posts", headers=auth_headers(author), data={"caption": "hi"})
    assert no_image.status_code == 400
    assert fake_storage["uploads"] == []


def test_create_post_rejects_oversized_image(client, user_factory, auth_headers, fake_storage):
    author = user_factory()
    response = client.post(
        "/posts",
        headers=auth_headers(author),
        files={"image": ("big.jpg", b"0" * (5 * 1024 * 1024 + 1), "image/jpeg")},
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Image must be 5MB or smaller"}


def test_create_post_removes_upload_when_insert_fails(client, user_factory, auth_headers, fake_storage, monkeypatch):
    author = user_factory()

    def _failing_commit(self) -> None:
        raise SQLAlchemyError("insert failed")

    monkeypatch.setattr(Session, "commit", _failing_commit)
    response = client.post(
        "/posts",
        headers=auth_headers(author),
        files={"image": ("photo.jpg", JPEG_BYTES, "image/jpeg")},
    )
    monkeypatch.undo()

    assert response.status_code == 500
    assert fake_storage["deleted_keys"] == [fake_storage["uploads"][0]["key"]]


def test_owner_delete_cascades_comments_and_likes(client, user_factory, post_factory, comment_factory, auth_headers, fake_storage):
    author = user_factory("author")
    fan = user_factory("fan")
    post = post_factory(author)
    comment_factory(post, fan, "nice")
    _like(post, fan)

    response = client.delete(f"/posts/{post.id}", headers=auth_headers(author))
    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Post deleted"}
    assert fake_storage["deleted_urls"] == [post.image_url]

    with SessionLocal() as session:
        assert session.get(Post, post.id) is None
        assert session.scalar(select(func.count(Comment.id)).where(Comment.post_id == post.id)) == 0
        assert session.scalar(select(func.count(Like.id)).where(Like.post_id == post.id)) == 0


def test_non_owner_delete_is_forbidden_and_changes_nothing(client, user_factory, post_factory, auth_headers, fake_storage):
    author = user_factory("author")
    intruder = user_factory("intruder")
    post = post_factory(author)

    response = client.delete(f"/posts/{post.id}", headers=auth_headers(intruder))
    assert response.status_code == 403
    assert response.json() == {"error": "You can only delete your own posts"}
    assert fake_storage["deleted_urls"] == []

    with SessionLocal() as session:
        assert session.get(Post, post.id) is not None


def test_delete_missing_post_returns_404(client, user_factory, auth_headers, fake_storage):
    user = user_factory()
    response = client.delete("/posts/3f0c52b4-0a4b-4f0c-9a0e-1b2c3d4e5f60", headers=auth_headers(user))
    assert response.status_code == 404
    assert response.json() == {"error": "Post not found"}
