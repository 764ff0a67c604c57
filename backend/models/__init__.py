"""SQLModel models package."""

from .comment import Comment
from .like import Like
from .location import Location
from .post import Post

__all__ = [
    "Location",
    "Post",
    "Comment",
    "Like",
]
