"""Post domain service."""

from typing import Optional
from uuid import uuid4

import logfire

from grove.domain.model.common import utc_now
from grove.domain.model.post import Post
from grove.domain.repository import PostRepository
from grove.domain.value import ForestId, PostId, UserId

from .base import Service


class PostService(Service):
    """Domain service for post operations."""

    def __init__(self, post_repository: PostRepository) -> None:
        """Initialize post service.

        Args:
            post_repository: Post repository
        """
        self.post_repository = post_repository

    async def create_post(
        self,
        author_id: UserId,
        author_name: str,
        content: str,
        forest_id: Optional[ForestId] = None,
        image_url: Optional[str] = None,
    ) -> Post:
        """Create a post.

        Args:
            author_id: Author user ID
            author_name: Author display name
            content: Post text
            forest_id: Forest the post is planted in
            image_url: Attached image

        Returns:
            Created post
        """
        with logfire.span(
            "post_service.create_post",
            author_id=str(author_id),
            forest_id=forest_id,
        ):
            now = utc_now()
            post = Post(
                id=PostId(str(uuid4())),
                author_id=author_id,
                author_name=author_name,
                content=content,
                forest_id=forest_id,
                image_url=image_url,
                created_at=now,
                updated_at=now,
                deleted_at=None,
            )
            saved = await self.post_repository.save(post)
            logfire.info("Post created", post_id=str(saved.id))
            return saved

    async def get_post_by_id(self, post_id: PostId) -> Post | None:
        """Get a post by ID.

        Args:
            post_id: Post ID

        Returns:
            Post if found, None otherwise
        """
        with logfire.span("post_service.get_post_by_id", post_id=str(post_id)):
            post = await self.post_repository.find_by_id(post_id)

            if post:
                logfire.info("Post found", post_id=str(post_id))
            else:
                logfire.warn("Post not found", post_id=str(post_id))

            return post

    async def list_posts(
        self,
        forest_id: Optional[ForestId] = None,
        limit: int = 30,
        offset: int = 0,
    ) -> tuple[list[Post], int]:
        """Live posts, newest first, with the total matching count.

        Args:
            forest_id: Only posts in this forest
            limit: Maximum number of posts to return
            offset: Number of posts to skip

        Returns:
            The page of posts and the total
        """
        with logfire.span(
            "post_service.list_posts",
            forest_id=forest_id,
            limit=limit,
            offset=offset,
        ):
            total = await self.post_repository.count(forest_id=forest_id)
            posts = await self.post_repository.find_all(
                forest_id=forest_id,
                include_deleted=False,
                limit=limit,
                offset=offset,
            )
            return posts, total
