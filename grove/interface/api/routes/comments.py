"""Comment routes."""

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, HTTPException, Path, status
from pydantic import BaseModel, ConfigDict, Field, field_validator

from grove.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
    UpdateCommentRequest,
    UpdateCommentResponse,
    UpdateCommentUseCase,
)
from grove.domain.error import ContentDeletedException, NotAuthorizedError, NotFoundError
from grove.domain.value import ImageUrl
from grove.interface.api.security import guard, require_actor, sanitize_payload
from grove.util.jwt import TokenPayload

router = APIRouter(prefix="/comments", tags=["comments"], route_class=DishkaRoute)


class CreateCommentAPIRequest(BaseModel):
    """API request for creating a comment."""

    model_config = ConfigDict(extra="forbid")

    content: str = Field(min_length=1, max_length=10000)
    post_id: str = Field(alias="postId", min_length=1, max_length=100)
    parent_id: str | None = Field(
        default=None, alias="parentId", min_length=1, max_length=100
    )
    image_url: str | None = Field(default=None, alias="imageUrl", max_length=10000)

    @field_validator("image_url")
    @classmethod
    def validate_image_url(cls, v: str | None) -> str | None:
        return ImageUrl(v).root if v is not None else None


class UpdateCommentAPIRequest(BaseModel):
    """API request for editing a comment."""

    model_config = ConfigDict(extra="forbid")

    content: str = Field(min_length=1, max_length=10000)


@router.post(
    "",
    response_model=CreateCommentResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=guard("comments"),
)
async def create_comment(
    request: CreateCommentAPIRequest,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
    actor: TokenPayload = Depends(require_actor),
) -> CreateCommentResponse:
    """Create a comment on a post or reply to another comment.

    Requires authentication.

    Args:
        request: Comment creation data
        create_comment_use_case: Create comment use case from DI
        actor: Authenticated user

    Returns:
        The stored comment record

    Raises:
        HTTPException: If the post is missing or the parent is invalid
    """
    request = sanitize_payload(request)

    try:
        return await create_comment_use_case.execute(
            CreateCommentRequest(
                post_id=request.post_id,
                content=request.content,
                author_id=actor.user_id,
                author_name=actor.name,
                author_avatar=actor.avatar,
                parent_id=request.parent_id,
                image_url=request.image_url,
            )
        )
    except NotFoundError as e:
        logfire.warn("Comment creation failed - post not found", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Post not found",
        )
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )


@router.patch(
    "/{comment_id}",
    response_model=UpdateCommentResponse,
    dependencies=guard("edits"),
)
async def update_comment(
    request: UpdateCommentAPIRequest,
    update_comment_use_case: FromDishka[UpdateCommentUseCase],
    comment_id: str = Path(min_length=1, max_length=100),
    actor: TokenPayload = Depends(require_actor),
) -> UpdateCommentResponse:
    """Update a comment's text content.

    Only the comment author can edit.

    Args:
        request: Update data (text content)
        update_comment_use_case: Update comment use case from DI
        comment_id: Comment ID
        actor: Authenticated user

    Returns:
        Updated comment record

    Raises:
        HTTPException: If not authorized or the comment is missing or deleted
    """
    request = sanitize_payload(request)

    try:
        return await update_comment_use_case.execute(
            UpdateCommentRequest(
                comment_id=comment_id,
                user_id=actor.user_id,
                content=request.content,
            )
        )
    except NotAuthorizedError as e:
        logfire.warn("Unauthorized comment update attempt", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized to edit this comment",
        )
    except (NotFoundError, ContentDeletedException) as e:
        logfire.warn("Attempt to edit missing or deleted comment", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Comment not found or has been deleted",
        )
    except ValueError as e:
        logfire.warn("Comment update validation error", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )


@router.delete(
    "/{comment_id}",
    response_model=DeleteCommentResponse,
    dependencies=guard("deletes"),
)
async def delete_comment(
    delete_comment_use_case: FromDishka[DeleteCommentUseCase],
    comment_id: str = Path(min_length=1, max_length=100),
    actor: TokenPayload = Depends(require_actor),
) -> DeleteCommentResponse:
    """Soft delete a comment.

    Only the comment author can delete. Replies stay in place and the
    comment shows as "[deleted]". Deleting twice succeeds.

    Args:
        delete_comment_use_case: Delete comment use case from DI
        comment_id: Comment ID
        actor: Authenticated user

    Returns:
        Success marker

    Raises:
        HTTPException: If not authorized or the comment doesn't exist
    """
    try:
        return await delete_comment_use_case.execute(
            DeleteCommentRequest(comment_id=comment_id, user_id=actor.user_id)
        )
    except NotAuthorizedError as e:
        logfire.warn("Unauthorized comment delete attempt", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized to delete this comment",
        )
    except NotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Comment not found",
        )
