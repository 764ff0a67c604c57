"""Like toggle service.

Keeps ``posts.likes_count`` equal to the number of ``likes`` rows for the post.
Each mutation runs the existence check, the like row write and the counter
adjustment inside a single transaction:

* the post row is locked first (``SELECT ... FOR UPDATE`` where the dialect
  supports it) so concurrent toggles on one post serialize;
* the counter is adjusted with an in-database expression, never a value read
  back into Python and written again;
* the composite primary key on ``likes`` is the final authority on duplicates,
  so a racing insert that slips past the existence check surfaces as
  :class:`AlreadyExistsError` instead of a second like.

Re-liking is rejected with a conflict rather than treated as a no-op.
Identifiers are opaque client-generated strings and are trusted as given.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, cast

from sqlalchemy import case, delete, func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import ColumnElement

from db.errors import is_foreign_key_violation, is_unique_violation
from models import Like, Location, Post
from models.like import MAX_USER_IDENTIFIER_LENGTH

from .common import asc, build_page, desc, eq, floor_count
from .errors import (
    AlreadyExistsError,
    InvalidArgumentError,
    NotFoundError,
    ServiceError,
    StoreFailureError,
)
from .posts import post_fields
from .schemas import LikeCreated, LikedPostView, LikeRemoved, LikeSummary, Page

logger = logging.getLogger(__name__)


def normalize_user_identifier(raw: str | None) -> str:
    """Return the trimmed identifier or raise InvalidArgumentError."""
    if raw is None:
        raise InvalidArgumentError("user_identifier is required")
    if not isinstance(raw, str):
        raise InvalidArgumentError("user_identifier must be a string")
    identifier = raw.strip()
    if not identifier:
        raise InvalidArgumentError("user_identifier is required")
    if len(identifier) > MAX_USER_IDENTIFIER_LENGTH:
        raise InvalidArgumentError(
            f"user_identifier must be at most {MAX_USER_IDENTIFIER_LENGTH} characters"
        )
    return identifier


def _like_pair_filter(post_id: int, user_identifier: str) -> tuple[ColumnElement[bool], ...]:
    return (
        eq(Like.post_id, post_id),
        eq(Like.user_identifier, user_identifier),
    )


async def _lock_post(session: AsyncSession, post_id: int) -> bool:
    post_id_column = cast(ColumnElement[int], Post.id)
    result = await session.execute(
        select(post_id_column)
        .where(eq(post_id_column, post_id))
        .with_for_update()
        .limit(1)
    )
    return result.scalar_one_or_none() is not None


async def _read_stored_count(session: AsyncSession, post_id: int) -> int:
    likes_count_column = cast(ColumnElement[int], Post.likes_count)
    result = await session.execute(
        select(likes_count_column).where(eq(Post.id, post_id))
    )
    return floor_count(result.scalar_one_or_none())


async def add_like(
    session: AsyncSession,
    post_id: int,
    user_identifier: str | None,
) -> LikeCreated:
    """Record a like for the pair and return the refreshed count.

    Raises NotFoundError when the post is missing and AlreadyExistsError when
    the pair is already liked; the counter is untouched in both cases.
    """
    identifier = normalize_user_identifier(user_identifier)

    try:
        if not await _lock_post(session, post_id):
            raise NotFoundError("Post not found")

        existing = await session.execute(
            select(cast(ColumnElement[int], Like.post_id))
            .where(*_like_pair_filter(post_id, identifier))
            .limit(1)
        )
        if existing.first() is not None:
            raise AlreadyExistsError("Post already liked")

        # SQLite's CURRENT_TIMESTAMP has one-second resolution.
        session.add(
            Like(
                post_id=post_id,
                user_identifier=identifier,
                created_at=datetime.now(timezone.utc),
            )
        )
        await session.flush()

        likes_count_column = cast(Any, Post.likes_count)
        await session.execute(
            update(Post)
            .where(eq(Post.id, post_id))
            .values(likes_count=likes_count_column + 1)
            .execution_options(synchronize_session=False)
        )
        like_count = await _read_stored_count(session, post_id)
        await session.commit()
    except ServiceError:
        await session.rollback()
        raise
    except IntegrityError as exc:
        await session.rollback()
        if is_unique_violation(exc):
            logger.info(
                "Rejected concurrent duplicate like",
                extra={"post_id": post_id, "user_identifier": identifier},
            )
            raise AlreadyExistsError("Post already liked") from exc
        if is_foreign_key_violation(exc):
            raise NotFoundError("Post not found") from exc
        raise StoreFailureError(str(exc)) from exc
    except SQLAlchemyError as exc:
        await session.rollback()
        logger.warning(
            "Failed to add like",
            extra={"post_id": post_id},
            exc_info=exc,
        )
        raise StoreFailureError(str(exc)) from exc

    logger.info(
        "Post liked",
        extra={"post_id": post_id, "like_count": like_count},
    )
    return LikeCreated(post_id=post_id, like_count=like_count, user_identifier=identifier)


async def remove_like(
    session: AsyncSession,
    post_id: int,
    user_identifier: str | None,
) -> LikeRemoved:
    """Delete the pair's like and return the refreshed count.

    The delete's row count decides whether a like existed, so two racing
    removals decrement the counter once. The decrement is clamped at zero.
    """
    identifier = normalize_user_identifier(user_identifier)

    try:
        if not await _lock_post(session, post_id):
            raise NotFoundError("Like not found")

        delete_result = await session.execute(
            delete(Like)
            .where(*_like_pair_filter(post_id, identifier))
            .execution_options(synchronize_session=False)
        )
        deleted_rows = int(cast(Any, delete_result).rowcount or 0)
        if deleted_rows == 0:
            raise NotFoundError("Like not found")

        likes_count_column = cast(Any, Post.likes_count)
        await session.execute(
            update(Post)
            .where(eq(Post.id, post_id))
            .values(
                likes_count=case(
                    (likes_count_column > 0, likes_count_column - 1),
                    else_=0,
                )
            )
            .execution_options(synchronize_session=False)
        )
        like_count = await _read_stored_count(session, post_id)
        await session.commit()
    except ServiceError:
        await session.rollback()
        raise
    except SQLAlchemyError as exc:
        await session.rollback()
        logger.warning(
            "Failed to remove like",
            extra={"post_id": post_id},
            exc_info=exc,
        )
        raise StoreFailureError(str(exc)) from exc

    logger.info(
        "Post unliked",
        extra={"post_id": post_id, "like_count": like_count},
    )
    return LikeRemoved(post_id=post_id, like_count=like_count)


async def get_like_summary(session: AsyncSession, post_id: int) -> LikeSummary:
    """Count the like rows for a post and list who liked it, oldest first."""
    user_identifier_column = cast(ColumnElement[str], Like.user_identifier)
    result = await session.execute(
        select(user_identifier_column)
        .where(eq(Like.post_id, post_id))
        .order_by(
            asc(cast(Any, Like.created_at)),
            asc(user_identifier_column),
        )
    )
    liked_users = [row[0] for row in result.all()]
    return LikeSummary(
        post_id=post_id,
        like_count=len(liked_users),
        liked_users=liked_users,
    )


async def list_liked_posts(
    session: AsyncSession,
    user_identifier: str | None,
    *,
    limit: int,
    offset: int = 0,
) -> Page[LikedPostView]:
    """Return posts the identifier liked, most recent like first."""
    identifier = normalize_user_identifier(user_identifier)

    post_entity = cast(Any, Post)
    location_name_column = cast(ColumnElement[str], Location.name)
    liked_at_column = cast(Any, Like.created_at)
    query = (
        select(post_entity, location_name_column, liked_at_column)
        .join(Like, eq(Like.post_id, Post.id))
        .join(Location, eq(Location.id, Post.location_id))
        .where(eq(Like.user_identifier, identifier))
        .order_by(
            desc(liked_at_column),
            desc(cast(Any, Post.id)),
        )
        .limit(limit)
    )
    if offset > 0:
        query = query.offset(offset)

    result = await session.execute(query)
    items = [
        LikedPostView(**post_fields(post, location_name), liked_at=liked_at)
        for post, location_name, liked_at in result.all()
    ]
    return build_page(items, limit=limit, offset=offset)


async def reconcile_like_counts(
    session: AsyncSession,
    *,
    post_ids: list[int] | None = None,
    batch_size: int | None = None,
) -> int:
    """Rewrite ``likes_count`` from the likes table for posts that drifted.

    Returns the number of posts corrected.
    """
    if batch_size is not None and batch_size <= 0:
        raise ValueError("batch_size must be positive")

    post_id_column = cast(ColumnElement[int], Post.id)
    likes_count_column = cast(ColumnElement[int], Post.likes_count)
    actual_count = (
        select(func.count())
        .select_from(Like)
        .where(eq(Like.post_id, Post.id))
        .correlate(Post)
        .scalar_subquery()
    )
    drift_query = (
        select(post_id_column)
        .where(cast(ColumnElement[bool], likes_count_column != actual_count))
        .order_by(asc(post_id_column))
    )
    if post_ids is not None:
        if not post_ids:
            return 0
        drift_query = drift_query.where(post_id_column.in_(post_ids))
    if batch_size is not None:
        drift_query = drift_query.limit(batch_size)

    try:
        drift_result = await session.execute(drift_query)
        drifted_ids = [row[0] for row in drift_result.all()]
        if not drifted_ids:
            await session.rollback()
            return 0

        await session.execute(
            update(Post)
            .where(post_id_column.in_(drifted_ids))
            .values(likes_count=actual_count)
            .execution_options(synchronize_session=False)
        )
        await session.commit()
    except SQLAlchemyError as exc:
        await session.rollback()
        raise StoreFailureError(str(exc)) from exc

    logger.warning(
        "Reconciled drifted like counts",
        extra={"corrected_posts": len(drifted_ids), "post_ids": drifted_ids},
    )
    return len(drifted_ids)
