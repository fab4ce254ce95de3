"""Get post use case."""

import logfire
from pydantic import BaseModel

from grove.application.usecase.base import BaseUseCase
from grove.application.usecase.comment.item import CommentItem
from grove.domain.error import NotFoundError
from grove.domain.service import CommentService, PostService
from grove.domain.thread import find_orphans
from grove.domain.value import PostId

from .item import PostItem


class GetPostRequest(BaseModel):
    """Get post request."""

    post_id: str


class GetPostResponse(BaseModel):
    """Get post response: the post and its flat comment list."""

    post: PostItem
    comments: list[CommentItem]


class GetPostUseCase(BaseUseCase):
    """Use case for getting a post together with all of its comments."""

    def __init__(
        self,
        post_service: PostService,
        comment_service: CommentService,
    ) -> None:
        """Initialize get post use case.

        Args:
            post_service: Post domain service
            comment_service: Comment domain service
        """
        self.post_service = post_service
        self.comment_service = comment_service

    async def execute(self, request: GetPostRequest) -> GetPostResponse:
        """Execute get post flow.

        Comments are returned flat and oldest first, ready to be built into a
        reply tree. Deleted comments are included as "[deleted]" placeholders
        so their replies keep a parent.

        Args:
            request: Get post request with post ID

        Returns:
            Post details with comments

        Raises:
            NotFoundError: If the post doesn't exist or is deleted
        """
        post_id = PostId(request.post_id)

        post = await self.post_service.get_post_by_id(post_id)
        if post is None or post.deleted_at is not None:
            raise NotFoundError("Post", request.post_id)

        comments = await self.comment_service.get_comments_for_post(
            post_id=post_id,
            include_deleted=True,
        )

        orphans = find_orphans(comments)
        if orphans:
            logfire.warn(
                "Comments reference missing parents",
                post_id=request.post_id,
                comment_ids=[str(c.id) for c in orphans],
            )

        return GetPostResponse(
            post=PostItem.from_post(post),
            comments=[CommentItem.from_comment(c) for c in comments],
        )
