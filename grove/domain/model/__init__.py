"""Domain model entities for Grove."""

from grove.domain.model.comment import Comment
from grove.domain.model.forest import Forest
from grove.domain.model.post import Post

__all__ = [
    "Post",
    "Comment",
    "Forest",
]
