"""Domain value objects for Grove."""

from grove.domain.value.identifiers import CommentId, ForestId, PostId, UserId
from grove.domain.value.types import CollapseState, ErrorCode, ImageUrl

__all__ = [
    # Identifiers
    "UserId",
    "PostId",
    "CommentId",
    "ForestId",
    # Types
    "CollapseState",
    "ErrorCode",
    "ImageUrl",
]
