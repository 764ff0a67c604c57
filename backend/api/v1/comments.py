"""Comment retrieval endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from api.deps import get_db
from services import comments as comment_service
from services.errors import ServiceError
from services.schemas import (
    AuthoredCommentView,
    CommentCount,
    CommentDetail,
    CommentView,
    Page,
)
from .errors import http_error_from
from .pagination import (
    DEFAULT_COMMENT_PAGE_SIZE,
    DEFAULT_PAGE_SIZE,
    Limit,
    Offset,
    RecordId,
    set_next_offset_header,
)

router = APIRouter(prefix="/comments", tags=["comments"])


@router.get("/posts/{post_id}", response_model=Page[CommentView])
async def list_post_comments(
    post_id: RecordId,
    response: Response,
    limit: Limit = DEFAULT_COMMENT_PAGE_SIZE,
    offset: Offset = 0,
    session: AsyncSession = Depends(get_db),
) -> Page[CommentView]:
    page = await comment_service.list_comments_for_post(
        session,
        post_id,
        limit=limit,
        offset=offset,
    )
    set_next_offset_header(
        response,
        offset=offset,
        limit=limit,
        has_more=page.pagination.has_more,
    )
    return page


@router.get("/posts/{post_id}/count", response_model=CommentCount)
async def count_post_comments(
    post_id: RecordId,
    session: AsyncSession = Depends(get_db),
) -> CommentCount:
    return await comment_service.count_comments(session, post_id)


@router.get("/user/{author_name}", response_model=Page[AuthoredCommentView])
async def list_author_comments(
    author_name: str,
    response: Response,
    limit: Limit = DEFAULT_PAGE_SIZE,
    offset: Offset = 0,
    session: AsyncSession = Depends(get_db),
) -> Page[AuthoredCommentView]:
    try:
        page = await comment_service.list_comments_by_author(
            session,
            author_name,
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


@router.get("/{comment_id}", response_model=CommentDetail)
async def get_comment(
    comment_id: RecordId,
    session: AsyncSession = Depends(get_db),
) -> CommentDetail:
    try:
        return await comment_service.get_comment(session, comment_id)
    except ServiceError as exc:
        raise http_error_from(exc) from exc
