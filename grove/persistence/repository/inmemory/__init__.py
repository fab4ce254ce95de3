"""In-memory repository implementations for testing."""

from .comment import InMemoryCommentRepository
from .forest import InMemoryForestRepository
from .post import InMemoryPostRepository

__all__ = [
    "InMemoryCommentRepository",
    "InMemoryForestRepository",
    "InMemoryPostRepository",
]
