"""Shared pagination constants, path id types and response header helpers."""

from typing import Annotated

from fastapi import Path, Query, Response

from core import settings

MAX_PAGE_SIZE = settings.max_page_size
DEFAULT_PAGE_SIZE = settings.default_page_size
DEFAULT_COMMENT_PAGE_SIZE = settings.default_comment_page_size
# Largest value a signed 64-bit INTEGER column can bind.
MAX_STORED_INTEGER = 2**63 - 1

Limit = Annotated[int, Query(ge=1, le=MAX_PAGE_SIZE)]
Offset = Annotated[int, Query(ge=0, le=MAX_STORED_INTEGER)]
RecordId = Annotated[int, Path(ge=1, le=MAX_STORED_INTEGER)]


def set_next_offset_header(
    response: Response,
    *,
    offset: int,
    limit: int,
    has_more: bool,
) -> None:
    if has_more:
        response.headers["X-Next-Offset"] = str(offset + limit)
