"""Tests for post retrieval and cascade deletion."""

from datetime import datetime, timedelta

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from models import Comment, Like, Location, Post
from services.posts import post_fields


async def _add_comments(session: AsyncSession, post_id: int, *contents: str) -> None:
    session.add_all(
        [
            Comment(post_id=post_id, author_name=f"guest{index}", content=content)
            for index, content in enumerate(contents)
        ]
    )
    await session.commit()


@pytest.mark.asyncio
async def test_list_posts_newest_first_with_location_and_comment_count(
    async_client: AsyncClient,
    db_session: AsyncSession,
    location: Location,
):
    base_time = datetime(2026, 10, 1, 10, 0, 0)
    older = Post(
        location_id=location.id,
        content="Older",
        author_name="crew",
        created_at=base_time,
    )
    newer = Post(
        location_id=location.id,
        content="Newer",
        author_name="crew",
        created_at=base_time + timedelta(hours=1),
    )
    db_session.add_all([older, newer])
    await db_session.commit()
    await _add_comments(db_session, older.id, "first!", "second")

    response = await async_client.get("/api/v1/posts")
    assert response.status_code == 200
    payload = response.json()
    assert [item["content"] for item in payload["data"]] == ["Newer", "Older"]
    assert payload["data"][0]["comment_count"] == 0
    assert payload["data"][1]["comment_count"] == 2
    assert payload["data"][1]["location_name"] == "Central Plaza"
    assert payload["count"] == 2
    assert payload["pagination"] == {"limit": 20, "offset": 0, "hasMore": False}


@pytest.mark.asyncio
async def test_list_posts_paginates_and_filters_by_location(
    async_client: AsyncClient,
    db_session: AsyncSession,
    make_post,
):
    gym = Location(name="Gymnasium", latitude=35.6575, longitude=139.5430)
    db_session.add(gym)
    await db_session.commit()
    await db_session.refresh(gym)

    for index in range(3):
        await make_post(f"plaza {index}")
    gym_post = await make_post("gym only", location_id=gym.id)

    first_page = await async_client.get("/api/v1/posts", params={"limit": 2})
    assert first_page.json()["pagination"]["hasMore"] is True
    assert first_page.headers.get("x-next-offset") == "2"

    filtered = await async_client.get("/api/v1/posts", params={"location_id": gym.id})
    assert [item["id"] for item in filtered.json()["data"]] == [gym_post.id]

    by_location = await async_client.get(f"/api/v1/locations/{gym.id}/posts")
    assert [item["id"] for item in by_location.json()["data"]] == [gym_post.id]


@pytest.mark.asyncio
async def test_list_posts_rejects_out_of_range_limit(async_client: AsyncClient):
    assert (await async_client.get("/api/v1/posts", params={"limit": 0})).status_code == 400
    assert (await async_client.get("/api/v1/posts", params={"limit": 101})).status_code == 400
    assert (await async_client.get("/api/v1/posts", params={"offset": -1})).status_code == 400


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "path",
    [
        "/api/v1/posts/99999999999999999999999",
        "/api/v1/comments/99999999999999999999999",
        "/api/v1/comments/posts/99999999999999999999999",
        "/api/v1/locations/99999999999999999999999",
        "/api/v1/locations/99999999999999999999999/posts",
    ],
)
async def test_oversized_record_ids_are_rejected(async_client: AsyncClient, path: str):
    response = await async_client.get(path)
    assert response.status_code == 400
    assert response.json()["detail"] == "Validation error"


@pytest.mark.asyncio
async def test_oversized_offset_and_location_filter_are_rejected(async_client: AsyncClient):
    huge = "99999999999999999999999"
    assert (await async_client.get("/api/v1/posts", params={"offset": huge})).status_code == 400
    assert (await async_client.get("/api/v1/posts", params={"location_id": huge})).status_code == 400
    assert (await async_client.delete(f"/api/v1/posts/{huge}")).status_code == 400


@pytest.mark.asyncio
async def test_get_post_includes_coordinates(
    async_client: AsyncClient,
    make_post,
    location: Location,
):
    post = await make_post(likes_count=3)

    response = await async_client.get(f"/api/v1/posts/{post.id}")
    assert response.status_code == 200
    payload = response.json()
    assert payload["id"] == post.id
    assert payload["likes_count"] == 3
    assert payload["latitude"] == location.latitude
    assert payload["longitude"] == location.longitude
    assert payload["comment_count"] == 0


@pytest.mark.asyncio
async def test_get_missing_post_returns_404(async_client: AsyncClient):
    response = await async_client.get("/api/v1/posts/987654")
    assert response.status_code == 404
    assert response.json()["detail"] == "Post not found"


@pytest.mark.asyncio
async def test_delete_post_cascades_likes_and_comments(
    async_client: AsyncClient,
    db_session: AsyncSession,
    make_post,
):
    post = await make_post()
    survivor = await make_post("Survivor")
    for user in ("u1", "u2"):
        liked = await async_client.post(
            f"/api/v1/likes/posts/{post.id}",
            json={"user_identifier": user},
        )
        assert liked.status_code == 201
    await async_client.post(
        f"/api/v1/likes/posts/{survivor.id}",
        json={"user_identifier": "u1"},
    )
    await _add_comments(db_session, post.id, "nice", "see you there", "!")

    response = await async_client.delete(f"/api/v1/posts/{post.id}")
    assert response.status_code == 200
    assert response.json() == {"post_id": post.id, "deleted_comments": 3, "deleted_likes": 2}

    assert (await async_client.get(f"/api/v1/posts/{post.id}")).status_code == 404
    summary = await async_client.get(f"/api/v1/likes/posts/{post.id}")
    assert summary.json() == {"post_id": post.id, "like_count": 0, "liked_users": []}
    comments = await async_client.get(f"/api/v1/comments/posts/{post.id}")
    assert comments.json()["data"] == []

    orphan_likes = await db_session.execute(
        select(func.count()).select_from(Like).where(Like.post_id == post.id)
    )
    orphan_comments = await db_session.execute(
        select(func.count()).select_from(Comment).where(Comment.post_id == post.id)
    )
    assert orphan_likes.scalar_one() == 0
    assert orphan_comments.scalar_one() == 0

    untouched = await async_client.get(f"/api/v1/likes/posts/{survivor.id}")
    assert untouched.json()["liked_users"] == ["u1"]


@pytest.mark.asyncio
async def test_delete_missing_post_returns_404(async_client: AsyncClient):
    response = await async_client.delete("/api/v1/posts/4040")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_like_after_delete_returns_404(async_client: AsyncClient, make_post):
    post = await make_post()
    await async_client.delete(f"/api/v1/posts/{post.id}")

    response = await async_client.post(
        f"/api/v1/likes/posts/{post.id}",
        json={"user_identifier": "late-visitor"},
    )
    assert response.status_code == 404


def test_negative_stored_counter_is_reported_as_zero() -> None:
    post = Post(id=1, location_id=1, content="Legacy", author_name="crew", likes_count=-2)

    assert post_fields(post, "Central Plaza")["likes_count"] == 0
