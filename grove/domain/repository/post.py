"""Post repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from grove.domain.model.post import Post
from grove.domain.value import ForestId, PostId


class PostRepository(ABC):
    """Repository for Post aggregate."""

    @abstractmethod
    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID.

        Args:
            post_id: The post's unique identifier

        Returns:
            The post if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all(
        self,
        forest_id: Optional[ForestId] = None,
        include_deleted: bool = False,
        limit: int = 30,
        offset: int = 0,
    ) -> list[Post]:
        """Find posts, newest first.

        Args:
            forest_id: Only posts in this forest (None for all posts)
            include_deleted: Whether to include soft-deleted posts
            limit: Maximum number of posts to return
            offset: Number of posts to skip

        Returns:
            List of posts matching the criteria
        """
        pass

    @abstractmethod
    async def count(
        self, forest_id: Optional[ForestId] = None, include_deleted: bool = False
    ) -> int:
        """Count posts with the same filters as ``find_all``."""
        pass

    @abstractmethod
    async def count_by_forest(self) -> dict[ForestId, int]:
        """Live post count per forest. Forests without posts are left out."""
        pass

    @abstractmethod
    async def save(self, post: Post) -> Post:
        """Save a post (create or update).

        Args:
            post: The post to save

        Returns:
            The saved post
        """
        pass
