"""FastAPI application factory."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from api.v1 import router as api_v1_router
from api.v1.errors import GENERIC_SERVER_ERROR
from core import configure_logging, settings
from db.session import AsyncSessionMaker
from services.locations import seed_campus_locations

logger = logging.getLogger(__name__)


async def _seed_locations_best_effort() -> None:
    async with AsyncSessionMaker() as session:
        try:
            await seed_campus_locations(session)
        except SQLAlchemyError as seed_error:
            await session.rollback()
            logger.warning(
                "Failed to seed campus locations; run migrations first",
                exc_info=seed_error,
            )


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    configure_logging()
    logger.info(
        "Starting %s",
        settings.app_name,
        extra={"environment": settings.environment},
    )
    if settings.seed_locations_on_startup:
        await _seed_locations_best_effort()
    yield
    logger.info("Stopping %s", settings.app_name)


async def _validation_error_handler(
    _: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "detail": "Validation error",
            "errors": jsonable_encoder(exc.errors()),
        },
    )


async def _store_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled database error",
        extra={"path": request.url.path, "method": request.method},
        exc_info=exc,
    )
    detail = GENERIC_SERVER_ERROR if settings.is_production else str(exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": detail},
    )


def create_app() -> FastAPI:
    application = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        lifespan=lifespan,
    )
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Next-Offset"],
    )
    application.add_exception_handler(RequestValidationError, _validation_error_handler)  # type: ignore[arg-type]
    application.add_exception_handler(SQLAlchemyError, _store_error_handler)

    @application.get(f"{settings.api_prefix}/health", tags=["health"])
    async def health() -> dict[str, Any]:
        return {
            "status": "OK",
            "message": f"{settings.app_name} is running",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "version": settings.app_version,
        }

    application.include_router(api_v1_router, prefix=settings.api_prefix)
    return application
