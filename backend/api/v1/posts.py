"""Post retrieval and removal endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.deps import get_db
from services import posts as post_service
from services.errors import ServiceError
from services.schemas import Page, PostDeletion, PostDetail, PostView
from .errors import http_error_from
from .pagination import (
    DEFAULT_PAGE_SIZE,
    MAX_STORED_INTEGER,
    Limit,
    Offset,
    RecordId,
    set_next_offset_header,
)

router = APIRouter(prefix="/posts", tags=["posts"])


@router.get("", response_model=Page[PostView])
async def list_posts(
    response: Response,
    limit: Limit = DEFAULT_PAGE_SIZE,
    offset: Offset = 0,
    location_id: Annotated[int | None, Query(ge=1, le=MAX_STORED_INTEGER)] = None,
    session: AsyncSession = Depends(get_db),
) -> Page[PostView]:
    page = await post_service.list_posts(
        session,
        limit=limit,
        offset=offset,
        location_id=location_id,
    )
    set_next_offset_header(
        response,
        offset=offset,
        limit=limit,
        has_more=page.pagination.has_more,
    )
    return page


@router.get("/{post_id}", response_model=PostDetail)
async def get_post(
    post_id: RecordId,
    session: AsyncSession = Depends(get_db),
) -> PostDetail:
    try:
        return await post_service.get_post(session, post_id)
    except ServiceError as exc:
        raise http_error_from(exc) from exc


@router.delete("/{post_id}", status_code=status.HTTP_200_OK, response_model=PostDeletion)
async def delete_post(
    post_id: RecordId,
    session: AsyncSession = Depends(get_db),
) -> PostDeletion:
    try:
        return await post_service.delete_post(session, post_id)
    except ServiceError as exc:
        raise http_error_from(exc) from exc
