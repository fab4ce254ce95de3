"""Domain services."""

from .base import Service
from .comment_service import CommentService
from .forest_service import ForestService, sort_by_activity_and_age
from .jwt_service import JWTService
from .post_service import PostService

__all__ = [
    "CommentService",
    "ForestService",
    "JWTService",
    "PostService",
    "Service",
    "sort_by_activity_and_age",
]
