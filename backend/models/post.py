"""Map journal post model."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Index, Integer, String, func, text
from sqlmodel import Field, SQLModel

MAX_POST_CONTENT_LENGTH = 280
MAX_AUTHOR_NAME_LENGTH = 50


class Post(SQLModel, table=True):
    """Short message pinned to a campus location."""

    __tablename__ = "posts"
    __table_args__ = (
        CheckConstraint("likes_count >= 0", name="ck_posts_likes_count_non_negative"),
        Index("ix_posts_location_created_at", "location_id", "created_at"),
        Index("ix_posts_created_at_id", "created_at", "id"),
    )

    id: int | None = Field(default=None, sa_column=Column(Integer, primary_key=True))
    location_id: int = Field(
        sa_column=Column(
            Integer,
            ForeignKey("locations.id"),
            nullable=False,
        )
    )
    content: str = Field(
        sa_column=Column(String(MAX_POST_CONTENT_LENGTH), nullable=False)
    )
    image_url: str | None = Field(
        default=None, sa_column=Column(String(255), nullable=True)
    )
    author_name: str = Field(
        sa_column=Column(String(MAX_AUTHOR_NAME_LENGTH), nullable=False)
    )
    # Denormalized; only the like toggle service writes it.
    likes_count: int = Field(
        default=0,
        sa_column=Column(Integer, nullable=False, server_default=text("0")),
    )
    created_at: datetime | None = Field(
        default=None,
        sa_column=Column(
            DateTime(timezone=True), server_default=func.now(), nullable=False
        ),
    )
