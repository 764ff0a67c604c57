"""Shared SQLAlchemy and pagination helpers for services."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, TypeVar, cast

from sqlalchemy.sql import ColumnElement

from .schemas import Page, Pagination

T = TypeVar("T")


def eq(column: Any, value: Any) -> ColumnElement[bool]:
    """Typed equality expression helper."""
    return cast(ColumnElement[bool], column == value)


def desc(column: Any) -> Any:
    """Typed descending ordering helper."""
    return cast(Any, column).desc()


def asc(column: Any) -> Any:
    """Typed ascending ordering helper."""
    return cast(Any, column).asc()


def build_page(items: Sequence[T], *, limit: int, offset: int) -> Page[T]:
    """Wrap one page of results.

    ``has_more`` is true whenever the page came back full, so the last page can
    report a further (empty) page when the total is a multiple of ``limit``.
    """
    return Page(
        data=list(items),
        count=len(items),
        pagination=Pagination(
            limit=limit,
            offset=offset,
            has_more=len(items) == limit,
        ),
    )


def floor_count(value: int | None) -> int:
    """Clamp a stored counter so it is never reported negative."""
    return max(0, int(value or 0))
