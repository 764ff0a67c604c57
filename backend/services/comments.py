"""Comment read queries."""

from __future__ import annotations

from typing import Any, cast

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import ColumnElement

from models import Comment, Location, Post

from .common import asc, build_page, desc, eq
from .errors import InvalidArgumentError, NotFoundError
from .schemas import AuthoredCommentView, CommentCount, CommentDetail, CommentView, Page


def _comment_fields(comment: Comment) -> dict[str, Any]:
    if comment.id is None:
        raise ValueError("Comment record missing identifier")
    return {
        "id": comment.id,
        "post_id": comment.post_id,
        "content": comment.content,
        "author_name": comment.author_name,
        "created_at": comment.created_at,
    }


async def list_comments_for_post(
    session: AsyncSession,
    post_id: int,
    *,
    limit: int,
    offset: int = 0,
) -> Page[CommentView]:
    """Return a post's comments in posting order."""
    comment_entity = cast(Any, Comment)
    post_author_column = cast(ColumnElement[str], Post.author_name)
    query = (
        select(comment_entity, post_author_column)
        .join(Post, eq(Post.id, Comment.post_id))
        .where(eq(Comment.post_id, post_id))
        .order_by(
            asc(cast(Any, Comment.created_at)),
            asc(cast(Any, Comment.id)),
        )
        .limit(limit)
    )
    if offset > 0:
        query = query.offset(offset)

    result = await session.execute(query)
    items = [
        CommentView(**_comment_fields(comment), post_author=post_author)
        for comment, post_author in result.all()
    ]
    return build_page(items, limit=limit, offset=offset)


async def get_comment(session: AsyncSession, comment_id: int) -> CommentDetail:
    comment_entity = cast(Any, Comment)
    result = await session.execute(
        select(
            comment_entity,
            cast(ColumnElement[str], Post.author_name),
            cast(ColumnElement[str], Post.content),
        )
        .join(Post, eq(Post.id, Comment.post_id))
        .where(eq(Comment.id, comment_id))
        .limit(1)
    )
    row = result.first()
    if row is None:
        raise NotFoundError("Comment not found")

    comment, post_author, post_content = row
    return CommentDetail(
        **_comment_fields(comment),
        post_author=post_author,
        post_content=post_content,
    )


async def count_comments(session: AsyncSession, post_id: int) -> CommentCount:
    comment_id_column = cast(ColumnElement[int], Comment.id)
    result = await session.execute(
        select(func.count(comment_id_column)).where(eq(Comment.post_id, post_id))
    )
    return CommentCount(post_id=post_id, comment_count=int(result.scalar_one() or 0))


async def list_comments_by_author(
    session: AsyncSession,
    author_name: str,
    *,
    limit: int,
    offset: int = 0,
) -> Page[AuthoredCommentView]:
    """Return comments signed with ``author_name``, newest first."""
    normalized_author = author_name.strip()
    if not normalized_author:
        raise InvalidArgumentError("author_name is required")

    comment_entity = cast(Any, Comment)
    query = (
        select(
            comment_entity,
            cast(ColumnElement[str], Post.author_name),
            cast(ColumnElement[str], Post.content),
            cast(ColumnElement[str], Location.name),
        )
        .join(Post, eq(Post.id, Comment.post_id))
        .join(Location, eq(Location.id, Post.location_id))
        .where(eq(Comment.author_name, normalized_author))
        .order_by(
            desc(cast(Any, Comment.created_at)),
            desc(cast(Any, Comment.id)),
        )
        .limit(limit)
    )
    if offset > 0:
        query = query.offset(offset)

    result = await session.execute(query)
    items = [
        AuthoredCommentView(
            **_comment_fields(comment),
            post_author=post_author,
            post_content=post_content,
            location_name=location_name,
        )
        for comment, post_author, post_content, location_name in result.all()
    ]
    return build_page(items, limit=limit, offset=offset)
