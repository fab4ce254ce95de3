"""Delete comment use case."""

import logfire
from pydantic import BaseModel

from grove.application.usecase.base import BaseUseCase
from grove.domain.error import NotAuthorizedError, NotFoundError
from grove.domain.service import CommentService
from grove.domain.value import CommentId


class DeleteCommentRequest(BaseModel):
    """Delete comment request."""

    comment_id: str
    user_id: str  # Current user ID (must be author)


class DeleteCommentResponse(BaseModel):
    """Delete comment response."""

    success: bool = True


class DeleteCommentUseCase(BaseUseCase):
    """Use case for soft deleting a comment.

    Only the comment's own row is tombstoned. Replies stay in place and keep
    pointing at it.
    """

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize delete comment use case.

        Args:
            comment_service: Comment service
        """
        self.comment_service = comment_service

    async def execute(self, request: DeleteCommentRequest) -> DeleteCommentResponse:
        """Execute delete comment flow.

        Deleting an already deleted comment succeeds again.

        Args:
            request: Delete comment request

        Returns:
            Success marker

        Raises:
            NotFoundError: If the comment doesn't exist
            NotAuthorizedError: If user doesn't own the comment
        """
        comment_id = CommentId(request.comment_id)

        comment = await self.comment_service.get_comment_by_id(comment_id)
        if comment is None:
            raise NotFoundError("Comment", request.comment_id)

        if comment.author_id != request.user_id:
            raise NotAuthorizedError(
                "comment", request.comment_id, request.user_id, action="delete"
            )

        deleted = await self.comment_service.soft_delete(comment_id)
        if deleted is None:
            raise NotFoundError("Comment", request.comment_id)

        logfire.info(
            "Comment deleted by author",
            comment_id=request.comment_id,
            user_id=request.user_id,
        )
        return DeleteCommentResponse(success=True)
