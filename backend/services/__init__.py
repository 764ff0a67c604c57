"""Business logic services."""

from .errors import (
    AlreadyExistsError,
    InvalidArgumentError,
    NotFoundError,
    ServiceError,
    StoreFailureError,
)
from .locations import CAMPUS_LOCATIONS, seed_campus_locations
from .likes import (
    add_like,
    get_like_summary,
    list_liked_posts,
    normalize_user_identifier,
    reconcile_like_counts,
    remove_like,
)
from .posts import delete_post, get_post, list_posts

__all__ = [
    "ServiceError",
    "InvalidArgumentError",
    "NotFoundError",
    "AlreadyExistsError",
    "StoreFailureError",
    "add_like",
    "remove_like",
    "get_like_summary",
    "list_liked_posts",
    "normalize_user_identifier",
    "reconcile_like_counts",
    "delete_post",
    "get_post",
    "list_posts",
    "CAMPUS_LOCATIONS",
    "seed_campus_locations",
]
