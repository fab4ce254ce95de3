"""Comment domain service."""

from collections.abc import Sequence
from typing import Optional
from uuid import uuid4

import logfire

from grove.domain.model.comment import Comment
from grove.domain.model.common import utc_now
from grove.domain.repository import CommentRepository
from grove.domain.value import CommentId, PostId, UserId

from .base import Service


class CommentService(Service):
    """Domain service for comment operations."""

    def __init__(self, comment_repository: CommentRepository) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
        """
        self.comment_repository = comment_repository

    async def create_comment(
        self,
        post_id: PostId,
        author_id: UserId,
        author_name: str,
        content: str,
        parent_id: CommentId | None = None,
        image_url: Optional[str] = None,
        author_avatar: Optional[str] = None,
    ) -> Comment:
        """Create a comment on a post or a reply to another comment.

        Args:
            post_id: Post ID
            author_id: Author user ID
            author_name: Author display name
            content: Comment text
            parent_id: Parent comment ID for replies (None for top-level)
            image_url: Attached image
            author_avatar: Author avatar URL

        Returns:
            Created comment

        Raises:
            ValueError: If parent comment invalid
        """
        with logfire.span(
            "comment_service.create_comment",
            post_id=str(post_id),
            author_id=str(author_id),
            parent_id=str(parent_id) if parent_id else None,
        ):
            if parent_id:
                parent = await self.comment_repository.find_by_id(parent_id)
                if not parent:
                    logfire.error(
                        "Parent comment not found",
                        parent_id=str(parent_id),
                        post_id=str(post_id),
                    )
                    raise ValueError("Parent comment not found")
                if parent.post_id != post_id:
                    logfire.error(
                        "Parent comment does not belong to post",
                        parent_id=str(parent_id),
                        parent_post_id=str(parent.post_id),
                        target_post_id=str(post_id),
                    )
                    raise ValueError("Parent comment does not belong to this post")

            now = utc_now()
            comment = Comment(
                id=CommentId(str(uuid4())),
                post_id=post_id,
                author_id=author_id,
                author_name=author_name,
                author_avatar=author_avatar,
                content=content,
                parent_id=parent_id,
                image_url=image_url,
                created_at=now,
                updated_at=now,
                deleted_at=None,
            )

            saved = await self.comment_repository.save(comment)
            logfire.info(
                "Comment created",
                comment_id=str(saved.id),
                post_id=str(post_id),
                is_reply=parent_id is not None,
            )
            return saved

    async def get_comments_for_post(
        self, post_id: PostId, include_deleted: bool = True
    ) -> list[Comment]:
        """Get all comments for a post, oldest first.

        Args:
            post_id: Post ID
            include_deleted: Whether to include tombstoned comments

        Returns:
            Flat list of comments ordered by creation time
        """
        with logfire.span(
            "comment_service.get_comments_for_post",
            post_id=str(post_id),
            include_deleted=include_deleted,
        ):
            comments = await self.comment_repository.find_by_post(
                post_id=post_id,
                include_deleted=include_deleted,
            )
            logfire.info(
                "Comments retrieved for post",
                post_id=str(post_id),
                count=len(comments),
            )
            return comments

    async def get_comment_by_id(self, comment_id: CommentId) -> Comment | None:
        """Get a comment by ID.

        Args:
            comment_id: Comment ID

        Returns:
            Comment if found, None otherwise
        """
        with logfire.span(
            "comment_service.get_comment_by_id", comment_id=str(comment_id)
        ):
            comment = await self.comment_repository.find_by_id(comment_id)
            if comment:
                logfire.info("Comment found", comment_id=str(comment_id))
            else:
                logfire.warn("Comment not found", comment_id=str(comment_id))
            return comment

    async def update_content(
        self, comment_id: CommentId, content: str
    ) -> Comment | None:
        """Replace the text of a comment.

        Args:
            comment_id: Comment ID
            content: New text content

        Returns:
            Updated comment, None if the comment doesn't exist or is deleted
        """
        with logfire.span(
            "comment_service.update_content",
            comment_id=str(comment_id),
            content_length=len(content),
        ):
            updated = await self.comment_repository.update_content(
                comment_id, content, utc_now()
            )

            if updated:
                logfire.info(
                    "Comment content updated",
                    comment_id=str(comment_id),
                    post_id=str(updated.post_id),
                )
            else:
                logfire.warn(
                    "Comment not found or deleted for content update",
                    comment_id=str(comment_id),
                )

            return updated

    async def soft_delete(self, comment_id: CommentId) -> Comment | None:
        """Tombstone a comment. Its replies stay attached.

        Deleting an already deleted comment keeps the original timestamp.

        Args:
            comment_id: Comment ID

        Returns:
            The tombstoned comment, None if it doesn't exist
        """
        with logfire.span("comment_service.soft_delete", comment_id=str(comment_id)):
            existing = await self.comment_repository.find_by_id(comment_id)
            if existing is None:
                logfire.warn("Comment not found for delete", comment_id=str(comment_id))
                return None
            if existing.deleted_at is not None:
                logfire.info("Comment already deleted", comment_id=str(comment_id))
                return existing

            deleted = await self.comment_repository.soft_delete(comment_id, utc_now())
            logfire.info(
                "Comment soft deleted",
                comment_id=str(comment_id),
                post_id=str(existing.post_id),
            )
            return deleted

    async def get_live_comments_for_posts(
        self, post_ids: Sequence[PostId]
    ) -> dict[PostId, list[Comment]]:
        """Live comments grouped by post, oldest first within each post.

        Every requested post gets an entry, empty when it has no comments.
        """
        with logfire.span(
            "comment_service.get_live_comments_for_posts", posts=len(post_ids)
        ):
            grouped: dict[PostId, list[Comment]] = {pid: [] for pid in post_ids}
            comments = await self.comment_repository.find_by_posts(
                post_ids, include_deleted=False
            )
            for comment in comments:
                grouped.setdefault(comment.post_id, []).append(comment)
            return grouped
