"""Create comment use case."""

from pydantic import BaseModel

from grove.application.usecase.base import BaseUseCase
from grove.domain.error import NotFoundError
from grove.domain.service import CommentService, PostService
from grove.domain.value import CommentId, PostId, UserId

from .item import CommentItem


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    post_id: str
    content: str
    author_id: str  # User ID from authenticated user
    author_name: str  # Display name from authenticated user
    author_avatar: str | None = None
    parent_id: str | None = None  # Parent comment ID for replies
    image_url: str | None = None


class CreateCommentResponse(CommentItem):
    """Create comment response: the stored comment record."""


class CreateCommentUseCase(BaseUseCase):
    """Use case for creating a comment on a post or replying to another comment."""

    def __init__(
        self,
        comment_service: CommentService,
        post_service: PostService,
    ) -> None:
        """Initialize create comment use case.

        Args:
            comment_service: Comment domain service
            post_service: Post domain service
        """
        self.comment_service = comment_service
        self.post_service = post_service

    async def execute(self, request: CreateCommentRequest) -> CreateCommentResponse:
        """Execute create comment flow.

        Steps:
        1. Verify post exists via post service
        2. Create comment via comment service (validates parent if replying)

        Args:
            request: Create comment request

        Returns:
            The created comment record

        Raises:
            NotFoundError: If the post doesn't exist or is deleted
            ValueError: If the parent comment is missing or on another post
        """
        post_id = PostId(request.post_id)

        post = await self.post_service.get_post_by_id(post_id)
        if post is None or post.deleted_at is not None:
            raise NotFoundError("Post", request.post_id)

        # Service handles parent validation
        comment = await self.comment_service.create_comment(
            post_id=post_id,
            author_id=UserId(request.author_id),
            author_name=request.author_name,
            content=request.content,
            parent_id=CommentId(request.parent_id) if request.parent_id else None,
            image_url=request.image_url,
            author_avatar=request.author_avatar,
        )

        return CreateCommentResponse.from_comment(comment)
