"""Update comment use case."""

from pydantic import BaseModel

from grove.application.usecase.base import BaseUseCase
from grove.domain.error import ContentDeletedException, NotAuthorizedError, NotFoundError
from grove.domain.service import CommentService
from grove.domain.value import CommentId

from .item import CommentItem


class UpdateCommentRequest(BaseModel):
    """Update comment request."""

    comment_id: str
    user_id: str  # Current user ID (must be author)
    content: str  # New text content (required, cannot be empty)


class UpdateCommentResponse(CommentItem):
    """Update comment response: the edited comment record."""


class UpdateCommentUseCase(BaseUseCase):
    """Use case for updating a comment's text content."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize update comment use case.

        Args:
            comment_service: Comment service
        """
        self.comment_service = comment_service

    async def execute(self, request: UpdateCommentRequest) -> UpdateCommentResponse:
        """Execute update comment flow.

        Args:
            request: Update comment request with comment ID, user ID, and new text

        Returns:
            Updated comment details

        Raises:
            NotFoundError: If the comment doesn't exist
            NotAuthorizedError: If user doesn't own the comment
            ContentDeletedException: If comment is deleted
        """
        comment_id = CommentId(request.comment_id)

        # 1. Retrieve existing comment
        comment = await self.comment_service.get_comment_by_id(comment_id)
        if comment is None:
            raise NotFoundError("Comment", request.comment_id)

        # 2. Check authorization (user owns comment)
        if comment.author_id != request.user_id:
            raise NotAuthorizedError("comment", request.comment_id, request.user_id)

        # 3. Check not deleted
        if comment.deleted_at is not None:
            raise ContentDeletedException("comment", request.comment_id)

        # 4. Update via service
        updated_comment = await self.comment_service.update_content(
            comment_id, request.content
        )

        # Deleted between the check and the update
        if updated_comment is None:
            raise ContentDeletedException("comment", request.comment_id)

        return UpdateCommentResponse.from_comment(updated_comment)
