"""Comment repository interface."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from datetime import datetime
from typing import List, Optional

from grove.domain.model.comment import Comment
from grove.domain.value import CommentId, PostId


class CommentRepository(ABC):
    """Repository for Comment entity.

    Defines the contract for comment persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found (tombstoned or not), None otherwise
        """
        pass

    @abstractmethod
    async def find_by_post(
        self,
        post_id: PostId,
        include_deleted: bool = True,
    ) -> List[Comment]:
        """Find all comments for a post, oldest first.

        Tombstoned comments are included by default so that replies below
        them keep a parent when the tree is rebuilt.

        Args:
            post_id: The post ID
            include_deleted: Whether to include soft-deleted comments

        Returns:
            Flat list of comments ordered ascending by created_at
        """
        pass

    @abstractmethod
    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create or update).

        Args:
            comment: The comment to save

        Returns:
            The saved comment
        """
        pass

    @abstractmethod
    async def update_content(
        self, comment_id: CommentId, content: str, updated_at: datetime
    ) -> Optional[Comment]:
        """Replace the content of a live comment.

        Args:
            comment_id: The comment ID
            content: New content
            updated_at: Edit timestamp

        Returns:
            The updated comment, None if missing or deleted
        """
        pass

    @abstractmethod
    async def soft_delete(
        self, comment_id: CommentId, deleted_at: datetime
    ) -> Optional[Comment]:
        """Tombstone a comment, keeping its row and its replies.

        Args:
            comment_id: The comment ID
            deleted_at: Tombstone timestamp

        Returns:
            The tombstoned comment, None if it does not exist
        """
        pass

    @abstractmethod
    async def count_by_post(self, post_id: PostId) -> int:
        """Count live comments for a post.

        Args:
            post_id: The post ID

        Returns:
            Number of comments that are not deleted
        """
        pass

    @abstractmethod
    async def find_by_posts(
        self,
        post_ids: Sequence[PostId],
        include_deleted: bool = False,
    ) -> List[Comment]:
        """Find the comments of several posts in one query.

        Args:
            post_ids: Posts to fetch comments for
            include_deleted: Whether to include soft-deleted comments

        Returns:
            Flat list ordered ascending by created_at across all posts
        """
        pass
