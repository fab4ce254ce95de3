"""In-memory comment repository for testing."""

from collections.abc import Sequence
from datetime import datetime
from typing import Optional

from grove.domain.model.comment import Comment
from grove.domain.repository.comment import CommentRepository
from grove.domain.value import CommentId, PostId


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing."""

    def __init__(self) -> None:
        self._comments: dict[CommentId, Comment] = {}

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._comments.get(comment_id)

    async def find_by_post(
        self,
        post_id: PostId,
        include_deleted: bool = True,
    ) -> list[Comment]:
        """Find all comments for a post, oldest first."""
        comments = [c for c in self._comments.values() if c.post_id == post_id]

        if not include_deleted:
            comments = [c for c in comments if c.deleted_at is None]

        # Stable sort keeps insertion order for equal timestamps
        comments.sort(key=lambda c: c.created_at)

        return comments

    async def save(self, comment: Comment) -> Comment:
        """Save or update a comment."""
        self._comments[comment.id] = comment
        return comment

    async def update_content(
        self, comment_id: CommentId, content: str, updated_at: datetime
    ) -> Optional[Comment]:
        """Replace the content of a live comment."""
        comment = self._comments.get(comment_id)
        if comment is None or comment.deleted_at is not None:
            return None
        # Comments are immutable, store an updated copy
        updated = comment.model_copy(
            update={"content": content, "updated_at": updated_at}
        )
        self._comments[comment_id] = updated
        return updated

    async def soft_delete(
        self, comment_id: CommentId, deleted_at: datetime
    ) -> Optional[Comment]:
        """Tombstone a comment."""
        comment = self._comments.get(comment_id)
        if comment is None:
            return None
        deleted = comment.model_copy(update={"deleted_at": deleted_at})
        self._comments[comment_id] = deleted
        return deleted

    async def count_by_post(self, post_id: PostId) -> int:
        """Count live comments for a post."""
        return sum(
            1
            for c in self._comments.values()
            if c.post_id == post_id and c.deleted_at is None
        )

    async def find_by_posts(
        self,
        post_ids: Sequence[PostId],
        include_deleted: bool = False,
    ) -> list[Comment]:
        """Find comments of several posts, oldest first."""
        wanted = set(post_ids)
        comments = [
            c
            for c in self._comments.values()
            if c.post_id in wanted and (include_deleted or c.deleted_at is None)
        ]
        comments.sort(key=lambda c: c.created_at)
        return comments
