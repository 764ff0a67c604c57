"""Service result schemas shared with the API layer."""

from __future__ import annotations

from datetime import datetime
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class Pagination(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    limit: int
    offset: int
    has_more: bool = Field(alias="hasMore")


class Page(BaseModel, Generic[T]):
    data: list[T]
    count: int
    pagination: Pagination


class LikeSummary(BaseModel):
    post_id: int
    like_count: int
    liked_users: list[str]


class LikeCreated(BaseModel):
    post_id: int
    like_count: int
    user_identifier: str


class LikeRemoved(BaseModel):
    post_id: int
    like_count: int


class PostBase(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    location_id: int
    location_name: str
    content: str
    image_url: str | None = None
    author_name: str
    likes_count: int = 0
    created_at: datetime


class PostView(PostBase):
    comment_count: int = 0


class PostDetail(PostView):
    latitude: float
    longitude: float


class LikedPostView(PostBase):
    liked_at: datetime


class PostDeletion(BaseModel):
    post_id: int
    deleted_comments: int
    deleted_likes: int


class CommentView(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    post_id: int
    content: str
    author_name: str
    created_at: datetime
    post_author: str


class CommentDetail(CommentView):
    post_content: str


class AuthoredCommentView(CommentDetail):
    location_name: str


class CommentCount(BaseModel):
    post_id: int
    comment_count: int


class LocationView(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    latitude: float
    longitude: float
    description: str | None = None
    post_count: int = 0
