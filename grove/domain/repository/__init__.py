"""Repository interfaces for Grove domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from grove.domain.repository.comment import CommentRepository
from grove.domain.repository.forest import ForestRepository
from grove.domain.repository.post import PostRepository

__all__ = [
    "PostRepository",
    "CommentRepository",
    "ForestRepository",
]
