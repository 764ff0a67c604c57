"""Post like model."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, String, func
from sqlmodel import Field, SQLModel

MAX_USER_IDENTIFIER_LENGTH = 100


class Like(SQLModel, table=True):
    """Records that an anonymous identifier liked a post.

    The composite primary key is the store-level guarantee that a pair is liked at
    most once; row existence is the only state.
    """

    __tablename__ = "likes"
    __table_args__ = (
        Index("ix_likes_post_created_at", "post_id", "created_at"),
        Index("ix_likes_user_created_at", "user_identifier", "created_at"),
    )

    post_id: int = Field(
        sa_column=Column(
            Integer,
            ForeignKey("posts.id"),
            primary_key=True,
        )
    )
    user_identifier: str = Field(
        sa_column=Column(
            String(MAX_USER_IDENTIFIER_LENGTH),
            primary_key=True,
        )
    )
    created_at: datetime | None = Field(
        default=None,
        sa_column=Column(
            DateTime(timezone=True), server_default=func.now(), nullable=False
        ),
    )
