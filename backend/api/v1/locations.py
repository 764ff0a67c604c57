"""Campus location endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from api.deps import get_db
from services import locations as location_service
from services import posts as post_service
from services.errors import ServiceError
from services.schemas import LocationView, Page, PostView
from .errors import http_error_from
from .pagination import DEFAULT_PAGE_SIZE, Limit, Offset, RecordId, set_next_offset_header

router = APIRouter(prefix="/locations", tags=["locations"])


@router.get("", response_model=list[LocationView])
async def list_locations(
    session: AsyncSession = Depends(get_db),
) -> list[LocationView]:
    return await location_service.list_locations(session)


@router.get("/{location_id}", response_model=LocationView)
async def get_location(
    location_id: RecordId,
    session: AsyncSession = Depends(get_db),
) -> LocationView:
    try:
        return await location_service.get_location(session, location_id)
    except ServiceError as exc:
        raise http_error_from(exc) from exc


@router.get("/{location_id}/posts", response_model=Page[PostView])
async def list_location_posts(
    location_id: RecordId,
    response: Response,
    limit: Limit = DEFAULT_PAGE_SIZE,
    offset: Offset = 0,
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
