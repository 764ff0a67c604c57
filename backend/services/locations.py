"""Campus location reference data."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, cast

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import ColumnElement

from models import Location, Post

from .common import asc, eq
from .errors import NotFoundError
from .schemas import LocationView

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SeedLocation:
    name: str
    latitude: float
    longitude: float
    description: str


CAMPUS_LOCATIONS: Sequence[SeedLocation] = (
    SeedLocation("Main Gate", 35.6581, 139.5414, "Main entrance"),
    SeedLocation("Student Cafeteria", 35.6585, 139.5420, "Food and rest area"),
    SeedLocation("Library Entrance", 35.6590, 139.5425, "Quiet study area"),
    SeedLocation("Gymnasium", 35.6575, 139.5430, "Sports event venue"),
    SeedLocation("Research Building A", 35.6595, 139.5415, "Research presentations and exhibits"),
    SeedLocation("Central Plaza", 35.6588, 139.5422, "Main stage and event venue"),
    SeedLocation("Campus Store", 35.6583, 139.5418, "Souvenirs and goods"),
    SeedLocation("Parking Lot", 35.6578, 139.5412, "Visitor parking"),
)


async def seed_campus_locations(
    session: AsyncSession,
    locations: Sequence[SeedLocation] = CAMPUS_LOCATIONS,
) -> int:
    """Insert the campus locations when the table is empty; return rows added."""
    location_id_column = cast(ColumnElement[int], Location.id)
    result = await session.execute(select(func.count(location_id_column)))
    if int(result.scalar_one() or 0) > 0:
        logger.info("Location data already present, skipping seed")
        return 0

    session.add_all(
        [
            Location(
                name=location.name,
                latitude=location.latitude,
                longitude=location.longitude,
                description=location.description,
            )
            for location in locations
        ]
    )
    await session.commit()
    logger.info("Seeded campus locations", extra={"inserted": len(locations)})
    return len(locations)


def _location_query() -> Any:
    location_entity = cast(Any, Location)
    post_id_column = cast(ColumnElement[int], Post.id)
    post_count = func.count(post_id_column).label("post_count")
    return (
        select(location_entity, post_count)
        .outerjoin(Post, eq(Post.location_id, Location.id))
        .group_by(cast(Any, Location.id))
    )


def _to_view(location: Location, post_count: int | None) -> LocationView:
    if location.id is None:
        raise ValueError("Location record missing identifier")
    return LocationView(
        id=location.id,
        name=location.name,
        latitude=location.latitude,
        longitude=location.longitude,
        description=location.description,
        post_count=int(post_count or 0),
    )


async def list_locations(session: AsyncSession) -> list[LocationView]:
    result = await session.execute(
        _location_query().order_by(asc(cast(Any, Location.id)))
    )
    return [_to_view(location, post_count) for location, post_count in result.all()]


async def get_location(session: AsyncSession, location_id: int) -> LocationView:
    result = await session.execute(
        _location_query().where(eq(Location.id, location_id))
    )
    row = result.first()
    if row is None:
        raise NotFoundError("Location not found")
    location, post_count = row
    return _to_view(location, post_count)
