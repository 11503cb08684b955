"""Tests for formatting helpers, markupsafe components and server-rendered pages."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from snapfeed.ui.components.cards import post_card
from snapfeed.ui.components.feed import feed
from snapfeed.ui.components.modal import create_post_form, post_modal
from snapfeed.ui.components.profile import post_grid, profile_header
from snapfeed.ui.formatting import caption_needs_expansion, format_relative_time, likes_label, parse_page

NOW = datetime(2026, 3, 10, 12, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    ("delta", "expected"),
    [
        (timedelta(seconds=30), "just now"),
        (timedelta(minutes=1), "1 minute ago"),
        (timedelta(minutes=45), "45 minutes ago"),
        (timedelta(hours=3), "3 hours ago"),
        (timedelta(days=6, hours=23), "6 days ago"),
        (timedelta(days=7), "2026-03-03"),
    ],
)
def test_format_relative_time(delta, expected):
    assert format_relative_time(NOW - delta, now=NOW) == expected


def test_format_relative_time_treats_naive_values_as_utc():
    naive = (NOW - timedelta(hours=2)).replace(tzinfo=None)
    assert format_relative_time(naive, now=NOW) == "2 hours ago"


def test_caption_expansion_threshold():
    assert caption_needs_expansion(None) is False
    assert caption_needs_expansion("x" * 60) is False
    assert caption_needs_expansion("x" * 61) is True


def test_likes_label():
    assert likes_label(0) is None
    assert likes_label(1) == "1 like"
    assert likes_label(1234) == "1,234 likes"


def _user(name: str = "ada") -> dict:
    return {"id": str(uuid4()), "external_id": f"ext-{name}", "name": name}


def _post(**overrides) -> dict:
    post = {
        "id": str(uuid4()),
        "user": _user(),
        "image_url": "https://cdn.example.test/a.jpg",
        "caption": "hello",
        "created_at": datetime.now(timezone.utc) - timedelta(minutes=5),
        "likes_count": 0,
        "comments_count": 0,
        "comments": [],
        "is_liked": False,
    }
    post.update(overrides)
    return post


def _comment(content: str, name: str = "bob") -> dict:
    return {"id": str(uuid4()), "content": content, "user": _user(name), "created_at": datetime.now(timezone.utc)}


def test_post_card_escapes_user_content_and_shows_state():
    html = str(post_card(_post(caption="<script>alert(1)</script>", likes_count=2, is_liked=True)))
    assert "<script>" not in html
    assert "&lt;script&gt;" in html
    assert "2 likes" in html
    assert 'data-liked="true"' in html
    assert "5 minutes ago" in html


def test_post_card_preview_and_view_all_link():
    comments = [_comment("newest"), _comment("older")]
    html = str(post_card(_post(comments=comments, comments_count=5)))
    assert "View all 5 comments" in html
    assert "newest" in html and "older" in html

    few = str(post_card(_post(comments=comments, comments_count=2)))
    assert "View all" not in few


def test_post_card_long_caption_gets_more_toggle():
    assert "... more" in str(post_card(_post(caption="y" * 90)))
    assert "caption-toggle" not in str(post_card(_post(caption="short")))


def test_feed_states():
    assert str(feed([], loading=True)).count("post-card-skeleton") == 3
    error_html = str(feed([], error="Could not load posts"))
    assert "Could not load posts" in error_html and "Try again" in error_html
    assert "No posts yet." in str(feed([]))

    populated = str(feed([_post()], page=1, has_more=True))
    assert 'href="/?page=2"' in populated
    assert str(feed([_post()], loading=True)).count("post-card-skeleton") == 2


def test_post_modal_owner_controls_and_comment_form():
    author = _user("ada")
    post = _post(user=author, comments=[_comment("first", "ada"), _comment("second", "bob")], comments_count=2)

    owner_view = str(post_modal(post, viewer_external_id="ext-ada"))
    assert "post-delete" in owner_view
    assert "comment-form" in owner_view
    assert owner_view.index("first") < owner_view.index("second")

    anonymous = str(post_modal(post))
    assert "post-delete" not in anonymous
    assert "Sign in to comment." in anonymous

    assert "Post not found" in str(post_modal(None, error="Post not found"))


def test_profile_header_and_grid_states():
    profile = {
        "external_id": "ext-ada",
        "name": "ada",
        "posts_count": 3,
        "followers_count": 1200,
        "following_count": 4,
        "is_following": True,
        "is_own_profile": False,
    }
    header = str(profile_header(profile, viewer_signed_in=True))
    assert "Following" in header and "1,200" in header

    own = str(profile_header({**profile, "is_own_profile": True}))
    assert "Your profile" in own and "follow-btn" not in own

    assert str(post_grid([], user_id="ext-ada", loading=True)).count("grid-skeleton-tile") == 9
    assert "retry-link" in str(post_grid([], user_id="ext-ada", error="boom"))
    assert "No posts yet" in str(post_grid([], user_id="ext-ada"))
    grid = str(post_grid([_post(likes_count=3)], user_id="ext-ada", has_more=True))
    assert "♥ 3" in grid and "/profile/ext-ada?page=2" in grid


def test_home_page_renders_feed(client, user_factory, post_factory):
    author = user_factory("painter")
    post_factory(author, caption="canvas")

    response = client.get("/")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert "canvas" in response.text
    assert "painter" in response.text


def test_home_page_shows_error_state_for_bad_page(client):
    response = client.get("/", params={"page": 0})
    assert response.status_code == 400
    assert "error-state" in response.text


def test_post_page_and_missing_post(client, user_factory, post_factory, comment_factory, auth_headers):
    author = user_factory("ada")
    post = post_factory(author, caption="detail caption")
    comment_factory(post, author, "a remark")

    page = client.get(f"/post/{post.id}", headers=auth_headers(author))
    assert page.status_code == 200
    assert "detail caption" in page.text and "a remark" in page.text
    assert "post-delete" in page.text

    missing = client.get(f"/post/{uuid4()}")
    assert missing.status_code == 404
    assert "Post not found" in missing.text


def test_profile_page(client, user_factory, post_factory, auth_headers):
    ada = user_factory("ada")
    viewer = user_factory("viewer")
    post_factory(ada)

    page = client.get(f"/profile/{ada.external_id}", headers=auth_headers(viewer))
    assert page.status_code == 200
    assert "follow-btn" in page.text
    assert "grid-item" in page.text

    own = client.get(f"/profile/{ada.external_id}", headers=auth_headers(ada))
    assert "Your profile" in own.text

    assert client.get("/profile/ghost").status_code == 404


@pytest.mark.parametrize(
    ("raw", "expected"),
    [(None, 1), ("", 1), ("3", 3), ("0", None), ("-2", None), ("abc", None), ("1.5", None)],
)
def test_parse_page(raw, expected):
    assert parse_page(raw) == expected


def test_create_post_form_targets_upload_endpoint():
    html = str(create_post_form())
    assert 'action="/posts"' in html
    assert 'enctype="multipart/form-data"' in html
    assert 'accept="image/jpeg,image/jpg,image/png,image/webp"' in html
    assert 'maxlength="2200"' in html
    assert f'data-max-bytes="{5 * 1024 * 1024}"' in html
    assert "0/2200" in html
    assert 'class="create-post-error hidden' in html


def test_create_post_form_keeps_caption_and_shows_error():
    html = str(create_post_form(caption="<b>hi</b>", error="Image must be 5MB or smaller"))
    assert "&lt;b&gt;hi&lt;/b&gt;" in html
    assert "9/2200" in html
    assert "Image must be 5MB or smaller" in html


def test_home_page_shows_create_form_only_to_signed_in_users(client, user_factory, auth_headers):
    author = user_factory("author")

    assert "create-post-form" not in client.get("/").text
    signed_in = client.get("/", headers=auth_headers(author))
    assert signed_in.status_code == 200
    assert "create-post-form" in signed_in.text
    assert "<title>Feed · Snapfeed</title>" in signed_in.text


@pytest.mark.parametrize("page", ["abc", "1.5"])
def test_html_pages_render_error_state_for_malformed_page(client, user_factory, page):
    author = user_factory("ada")

    home = client.get("/", params={"page": page})
    assert home.status_code == 400
    assert home.headers["content-type"].startswith("text/html")
    assert "error-state" in home.text
    assert "page must be a positive integer" in home.text

    profile = client.get(f"/profile/{author.external_id}", params={"page": page})
    assert profile.status_code == 400
    assert profile.headers["content-type"].startswith("text/html")
    assert "page must be a positive integer" in profile.text
    assert "ada" in profile.text
