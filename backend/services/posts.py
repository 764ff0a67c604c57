"""Post read queries and cascade deletion."""

from __future__ import annotations

import logging
from typing import Any, cast

from sqlalchemy import delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import ColumnElement

from models import Comment, Like, Location, Post

from .common import build_page, desc, eq, floor_count
from .errors import NotFoundError, ServiceError, StoreFailureError
from .schemas import Page, PostDeletion, PostDetail, PostView

logger = logging.getLogger(__name__)


def post_fields(post: Post, location_name: str) -> dict[str, Any]:
    """Return the shared post columns with the like counter floored at zero."""
    if post.id is None:
        raise ValueError("Post record missing identifier")
    return {
        "id": post.id,
        "location_id": post.location_id,
        "location_name": location_name,
        "content": post.content,
        "image_url": post.image_url,
        "author_name": post.author_name,
        "likes_count": floor_count(post.likes_count),
        "created_at": post.created_at,
    }


def comment_count_subquery() -> Any:
    comment_id_column = cast(ColumnElement[int], Comment.id)
    return (
        select(func.count(comment_id_column))
        .where(eq(Comment.post_id, Post.id))
        .correlate(Post)
        .scalar_subquery()
    )


async def list_posts(
    session: AsyncSession,
    *,
    limit: int,
    offset: int = 0,
    location_id: int | None = None,
) -> Page[PostView]:
    """Return posts newest first with location name and comment count."""
    post_entity = cast(Any, Post)
    location_name_column = cast(ColumnElement[str], Location.name)
    comment_count = comment_count_subquery().label("comment_count")
    query = (
        select(post_entity, location_name_column, comment_count)
        .join(Location, eq(Location.id, Post.location_id))
        .order_by(
            desc(cast(Any, Post.created_at)),
            desc(cast(Any, Post.id)),
        )
        .limit(limit)
    )
    if location_id is not None:
        query = query.where(eq(Post.location_id, location_id))
    if offset > 0:
        query = query.offset(offset)

    result = await session.execute(query)
    items = [
        PostView(**post_fields(post, location_name), comment_count=int(total or 0))
        for post, location_name, total in result.all()
    ]
    return build_page(items, limit=limit, offset=offset)


async def get_post(session: AsyncSession, post_id: int) -> PostDetail:
    post_entity = cast(Any, Post)
    comment_count = comment_count_subquery().label("comment_count")
    result = await session.execute(
        select(
            post_entity,
            cast(ColumnElement[str], Location.name),
            cast(ColumnElement[float], Location.latitude),
            cast(ColumnElement[float], Location.longitude),
            comment_count,
        )
        .join(Location, eq(Location.id, Post.location_id))
        .where(eq(Post.id, post_id))
        .limit(1)
    )
    row = result.first()
    if row is None:
        raise NotFoundError("Post not found")

    post, location_name, latitude, longitude, total = row
    return PostDetail(
        **post_fields(post, location_name),
        comment_count=int(total or 0),
        latitude=latitude,
        longitude=longitude,
    )


async def delete_post(session: AsyncSession, post_id: int) -> PostDeletion:
    """Delete a post together with its likes and comments in one transaction.

    Children go first so no orphaned rows are ever committed, and readers see
    either the whole post or nothing.
    """
    post_id_column = cast(ColumnElement[int], Post.id)
    try:
        result = await session.execute(
            select(post_id_column)
            .where(eq(post_id_column, post_id))
            .with_for_update()
            .limit(1)
        )
        if result.scalar_one_or_none() is None:
            raise NotFoundError("Post not found")

        like_result = await session.execute(
            delete(Like)
            .where(eq(Like.post_id, post_id))
            .execution_options(synchronize_session=False)
        )
        comment_result = await session.execute(
            delete(Comment)
            .where(eq(Comment.post_id, post_id))
            .execution_options(synchronize_session=False)
        )
        await session.execute(
            delete(Post)
            .where(eq(post_id_column, post_id))
            .execution_options(synchronize_session=False)
        )
        await session.commit()
    except ServiceError:
        await session.rollback()
        raise
    except SQLAlchemyError as exc:
        await session.rollback()
        logger.warning(
            "Failed to delete post",
            extra={"post_id": post_id},
            exc_info=exc,
        )
        raise StoreFailureError(str(exc)) from exc

    deletion = PostDeletion(
        post_id=post_id,
        deleted_comments=int(cast(Any, comment_result).rowcount or 0),
        deleted_likes=int(cast(Any, like_result).rowcount or 0),
    )
    logger.info("Post deleted", extra=deletion.model_dump())
    return deletion
