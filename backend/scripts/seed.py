"""Database seed script for local development.

Usage:
    python scripts/seed.py

Set ``SEED_DEMO_POSTS=false`` to seed only the campus locations.
"""

from __future__ import annotations

import asyncio
import os
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any, cast

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import ColumnElement

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.append(str(ROOT_DIR))

from core import configure_logging  # noqa: E402
from db.session import AsyncSessionMaker  # noqa: E402
from models import Comment, Location, Post  # noqa: E402
from services.errors import AlreadyExistsError  # noqa: E402
from services.likes import add_like  # noqa: E402
from services.locations import seed_campus_locations  # noqa: E402

SEED_DEMO_POSTS_ENV = "SEED_DEMO_POSTS"


def _eq(column: Any, value: Any) -> ColumnElement[bool]:
    return cast(ColumnElement[bool], column == value)


@dataclass(frozen=True)
class SeedComment:
    author_name: str
    content: str


@dataclass(frozen=True)
class SeedPost:
    location_name: str
    author_name: str
    content: str
    liked_by: Sequence[str] = ()
    comments: Sequence[SeedComment] = ()


BASE_POSTS: Sequence[SeedPost] = [
    SeedPost(
        location_name="Main Gate",
        author_name="festival_crew",
        content="Gates are open! Maps are at the info tent on the left.",
        liked_by=("demo-visitor-1", "demo-visitor-2"),
        comments=(SeedComment("mika", "Thanks, found it!"),),
    ),
    SeedPost(
        location_name="Student Cafeteria",
        author_name="ramen_lover",
        content="Curry stall line is short right now.",
        liked_by=("demo-visitor-1",),
        comments=(
            SeedComment("taro", "Still short at noon?"),
            SeedComment("ramen_lover", "About ten minutes now."),
        ),
    ),
    SeedPost(
        location_name="Central Plaza",
        author_name="stage_team",
        content="Band performance starts at 15:00 on the main stage.",
        liked_by=("demo-visitor-1", "demo-visitor-2", "demo-visitor-3"),
    ),
    SeedPost(
        location_name="Research Building A",
        author_name="robotics_lab",
        content="Robot arm demo every 30 minutes on the second floor.",
    ),
]


def _parse_bool(raw_value: str | None, *, default: bool) -> bool:
    if raw_value is None or raw_value.strip() == "":
        return default
    normalized = raw_value.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    raise ValueError(f"{SEED_DEMO_POSTS_ENV} must be a boolean")


async def _location_ids_by_name(session: AsyncSession) -> dict[str, int]:
    result = await session.execute(
        select(
            cast(ColumnElement[str], Location.name),
            cast(ColumnElement[int], Location.id),
        )
    )
    return {name: location_id for name, location_id in result.all()}


async def ensure_posts(session: AsyncSession, posts: Sequence[SeedPost]) -> list[tuple[int, SeedPost]]:
    location_ids = await _location_ids_by_name(session)
    created: list[tuple[int, SeedPost]] = []
    for seed_post in posts:
        location_id = location_ids.get(seed_post.location_name)
        if location_id is None:
            raise ValueError(f"Unknown seed location: {seed_post.location_name}")

        result = await session.execute(
            select(cast(ColumnElement[int], Post.id)).where(
                _eq(Post.author_name, seed_post.author_name),
                _eq(Post.content, seed_post.content),
            )
        )
        if result.scalar_one_or_none() is not None:
            continue

        post = Post(
            location_id=location_id,
            author_name=seed_post.author_name,
            content=seed_post.content,
        )
        session.add(post)
        await session.flush()
        if post.id is None:
            raise ValueError("Post missing identifier during seeding")

        session.add_all(
            [
                Comment(
                    post_id=post.id,
                    author_name=comment.author_name,
                    content=comment.content,
                )
                for comment in seed_post.comments
            ]
        )
        created.append((post.id, seed_post))

    await session.commit()
    return created


async def ensure_likes(session: AsyncSession, created: Sequence[tuple[int, SeedPost]]) -> int:
    # Likes go through the toggle service so likes_count stays in step.
    added = 0
    for post_id, seed_post in created:
        for user_identifier in seed_post.liked_by:
            try:
                await add_like(session, post_id, user_identifier)
            except AlreadyExistsError:
                continue
            added += 1
    return added


async def seed() -> None:
    include_demo_posts = _parse_bool(os.getenv(SEED_DEMO_POSTS_ENV), default=True)

    async with AsyncSessionMaker() as session:
        inserted_locations = await seed_campus_locations(session)
        created: list[tuple[int, SeedPost]] = []
        likes_added = 0
        if include_demo_posts:
            created = await ensure_posts(session, BASE_POSTS)
            likes_added = await ensure_likes(session, created)

    print("Seed data inserted.")
    print("   Locations added:", inserted_locations)
    print("   Posts added:", len(created))
    print("   Likes added:", likes_added)


def main() -> None:
    configure_logging()
    asyncio.run(seed())


if __name__ == "__main__":
    main()
