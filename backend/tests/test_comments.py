"""Tests for comment read endpoints."""

from datetime import datetime, timedelta

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from models import Comment


@pytest.mark.asyncio
async def test_post_comments_are_listed_oldest_first(
    async_client: AsyncClient,
    db_session: AsyncSession,
    make_post,
):
    post = await make_post(author_name="stage_team")
    base_time = datetime(2026, 10, 2, 13, 0, 0)
    db_session.add_all(
        [
            Comment(post_id=post.id, author_name="b", content="second", created_at=base_time + timedelta(minutes=5)),
            Comment(post_id=post.id, author_name="a", content="first", created_at=base_time),
        ]
    )
    await db_session.commit()

    response = await async_client.get(f"/api/v1/comments/posts/{post.id}")
    assert response.status_code == 200
    payload = response.json()
    assert [item["content"] for item in payload["data"]] == ["first", "second"]
    assert payload["data"][0]["post_author"] == "stage_team"
    assert payload["pagination"] == {"limit": 50, "offset": 0, "hasMore": False}

    count = await async_client.get(f"/api/v1/comments/posts/{post.id}/count")
    assert count.json() == {"post_id": post.id, "comment_count": 2}


@pytest.mark.asyncio
async def test_comment_count_for_unknown_post_is_zero(async_client: AsyncClient):
    response = await async_client.get("/api/v1/comments/posts/5150/count")
    assert response.status_code == 200
    assert response.json() == {"post_id": 5150, "comment_count": 0}


@pytest.mark.asyncio
async def test_get_comment_includes_post_context(
    async_client: AsyncClient,
    db_session: AsyncSession,
    make_post,
):
    post = await make_post("Lantern parade at dusk", author_name="crew")
    comment = Comment(post_id=post.id, author_name="mika", content="Where does it start?")
    db_session.add(comment)
    await db_session.commit()
    await db_session.refresh(comment)

    response = await async_client.get(f"/api/v1/comments/{comment.id}")
    assert response.status_code == 200
    payload = response.json()
    assert payload["post_author"] == "crew"
    assert payload["post_content"] == "Lantern parade at dusk"

    missing = await async_client.get("/api/v1/comments/999999")
    assert missing.status_code == 404
    assert missing.json()["detail"] == "Comment not found"


@pytest.mark.asyncio
async def test_author_comments_are_listed_newest_first(
    async_client: AsyncClient,
    db_session: AsyncSession,
    make_post,
):
    first_post = await make_post("Morning")
    second_post = await make_post("Evening")
    base_time = datetime(2026, 10, 3, 9, 0, 0)
    db_session.add_all(
        [
            Comment(post_id=first_post.id, author_name="taro", content="early", created_at=base_time),
            Comment(post_id=second_post.id, author_name="taro", content="late", created_at=base_time + timedelta(hours=8)),
            Comment(post_id=second_post.id, author_name="hana", content="other", created_at=base_time),
        ]
    )
    await db_session.commit()

    response = await async_client.get("/api/v1/comments/user/taro", params={"limit": 1})
    payload = response.json()
    assert [item["content"] for item in payload["data"]] == ["late"]
    assert payload["data"][0]["post_content"] == "Evening"
    assert payload["data"][0]["location_name"] == "Central Plaza"
    assert payload["pagination"]["hasMore"] is True
    assert response.headers.get("x-next-offset") == "1"

    rest = await async_client.get("/api/v1/comments/user/taro", params={"limit": 1, "offset": 1})
    assert [item["content"] for item in rest.json()["data"]] == ["early"]


@pytest.mark.asyncio
async def test_author_comments_reject_blank_author(async_client: AsyncClient):
    response = await async_client.get("/api/v1/comments/user/%20%20")
    assert response.status_code == 400
