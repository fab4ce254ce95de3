"""PostgreSQL repository implementations."""

from grove.persistence.repository.comment import PostgresCommentRepository
from grove.persistence.repository.forest import PostgresForestRepository
from grove.persistence.repository.post import PostgresPostRepository

__all__ = [
    "PostgresPostRepository",
    "PostgresCommentRepository",
    "PostgresForestRepository",
]
