"""Like toggle endpoints.

``user_identifier`` is an anonymous client-generated string. The server does
not authenticate it and trusts it as supplied.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from api.deps import get_db
from services import likes as like_service
from services.errors import ServiceError
from services.schemas import LikeCreated, LikedPostView, LikeRemoved, LikeSummary, Page
from .errors import http_error_from
from .pagination import DEFAULT_PAGE_SIZE, Limit, Offset, RecordId, set_next_offset_header

router = APIRouter(prefix="/likes", tags=["likes"])


class LikeRequest(BaseModel):
    user_identifier: str | None = None


@router.get("/posts/{post_id}", response_model=LikeSummary)
async def get_post_likes(
    post_id: RecordId,
    session: AsyncSession = Depends(get_db),
) -> LikeSummary:
    return await like_service.get_like_summary(session, post_id)


@router.post(
    "/posts/{post_id}",
    status_code=status.HTTP_201_CREATED,
    response_model=LikeCreated,
    responses={
        status.HTTP_404_NOT_FOUND: {"description": "Post not found"},
        status.HTTP_409_CONFLICT: {"description": "Post already liked"},
    },
)
async def like_post(
    post_id: RecordId,
    payload: LikeRequest,
    session: AsyncSession = Depends(get_db),
) -> LikeCreated:
    try:
        return await like_service.add_like(session, post_id, payload.user_identifier)
    except ServiceError as exc:
        raise http_error_from(exc) from exc


@router.delete(
    "/posts/{post_id}",
    status_code=status.HTTP_200_OK,
    response_model=LikeRemoved,
    responses={status.HTTP_404_NOT_FOUND: {"description": "Like not found"}},
)
async def unlike_post(
    post_id: RecordId,
    payload: LikeRequest,
    session: AsyncSession = Depends(get_db),
) -> LikeRemoved:
    try:
        return await like_service.remove_like(session, post_id, payload.user_identifier)
    except ServiceError as exc:
        raise http_error_from(exc) from exc


@router.get("/user/{user_identifier}", response_model=Page[LikedPostView])
async def list_user_liked_posts(
    user_identifier: str,
    response: Response,
    limit: Limit = DEFAULT_PAGE_SIZE,
    offset: Offset = 0,
    session: AsyncSession = Depends(get_db),
) -> Page[LikedPostView]:
    try:
        page = await like_service.list_liked_posts(
            session,
            user_identifier,
            limit=limit,
            offset=offset,
        )
    except ServiceError as exc:
        raise http_error_from(exc) from exc

    set_next_offset_header(
        response,
        offset=offset,
        limit=limit,
        has_more=page.pagination.has_more,
    )
    return page
