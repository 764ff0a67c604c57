"""Mapping from service errors to HTTP errors."""

from __future__ import annotations

from fastapi import HTTPException

from core import settings
from services.errors import ServiceError, StoreFailureError

GENERIC_SERVER_ERROR = "Internal server error"


def http_error_from(exc: ServiceError) -> HTTPException:
    detail = exc.message
    if isinstance(exc, StoreFailureError) and settings.is_production:
        detail = GENERIC_SERVER_ERROR
    return HTTPException(status_code=exc.status_code, detail=detail)
