"""Version 1 API routers."""

from fastapi import APIRouter

from . import comments, likes, locations, posts

router = APIRouter()
router.include_router(posts.router)
router.include_router(comments.router)
router.include_router(likes.router)
router.include_router(locations.router)

__all__ = ["router"]
