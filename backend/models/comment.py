"""Post comment model."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, String, func
from sqlmodel import Field, SQLModel

MAX_COMMENT_CONTENT_LENGTH = 500


class Comment(SQLModel, table=True):
    """Comment left on a post. Counts are computed on read."""

    __tablename__ = "comments"
    __table_args__ = (
        Index("ix_comments_post_created_at", "post_id", "created_at"),
        Index("ix_comments_author_created_at", "author_name", "created_at"),
    )

    id: int | None = Field(default=None, sa_column=Column(Integer, primary_key=True))
    post_id: int = Field(
        sa_column=Column(Integer, ForeignKey("posts.id"), nullable=False)
    )
    content: str = Field(
        sa_column=Column(String(MAX_COMMENT_CONTENT_LENGTH), nullable=False)
    )
    author_name: str = Field(sa_column=Column(String(50), nullable=False))
    created_at: datetime | None = Field(
        default=None,
        sa_column=Column(
            DateTime(timezone=True), server_default=func.now(), nullable=False
        ),
    )
