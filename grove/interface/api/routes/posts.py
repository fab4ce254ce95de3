"""Post routes."""

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, HTTPException, Path, Query, status
from pydantic import BaseModel, ConfigDict, Field, field_validator

from grove.application.usecase.comment import (
    GetCommentTreeRequest,
    GetCommentTreeResponse,
    GetCommentTreeUseCase,
)
from grove.application.usecase.post import (
    CreatePostRequest,
    CreatePostResponse,
    CreatePostUseCase,
    GetPostRequest,
    GetPostResponse,
    GetPostUseCase,
    ListPostsRequest,
    ListPostsResponse,
    ListPostsUseCase,
)
from grove.domain.error import NotFoundError
from grove.domain.value import ImageUrl
from grove.interface.api.security import (
    guard,
    rate_limit,
    require_actor,
    sanitize_payload,
)
from grove.util.jwt import TokenPayload

router = APIRouter(prefix="/posts", tags=["posts"], route_class=DishkaRoute)


class CreatePostAPIRequest(BaseModel):
    """API request for creating a post."""

    model_config = ConfigDict(extra="forbid")

    content: str = Field(min_length=1, max_length=50000)
    forest_id: str | None = Field(
        default=None, alias="forestId", min_length=1, max_length=100
    )
    image_url: str | None = Field(default=None, alias="imageUrl", max_length=10000)

    @field_validator("image_url")
    @classmethod
    def validate_image_url(cls, v: str | None) -> str | None:
        return ImageUrl(v).root if v is not None else None


@router.post(
    "",
    response_model=CreatePostResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=guard("posts"),
)
async def create_post(
    request: CreatePostAPIRequest,
    create_post_use_case: FromDishka[CreatePostUseCase],
    actor: TokenPayload = Depends(require_actor),
) -> CreatePostResponse:
    """Create a new post.

    Requires authentication.

    Args:
        request: Post creation data
        create_post_use_case: Create post use case from DI
        actor: Authenticated user

    Returns:
        Created post details

    Raises:
        HTTPException: If validation fails or the forest doesn't exist
    """
    request = sanitize_payload(request)

    try:
        return await create_post_use_case.execute(
            CreatePostRequest(
                author_id=actor.user_id,
                author_name=actor.name,
                content=request.content,
                forest_id=request.forest_id,
                image_url=request.image_url,
            )
        )
    except NotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Forest not found",
        )
    except ValueError as e:
        logfire.warn("Post creation validation error", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )


@router.get(
    "",
    response_model=ListPostsResponse,
    dependencies=[Depends(rate_limit("general"))],
)
async def list_posts(
    list_posts_use_case: FromDishka[ListPostsUseCase],
    forest_id: str | None = Query(
        default=None, alias="forestId", min_length=1, max_length=100
    ),
    limit: int = Query(default=30, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
) -> ListPostsResponse:
    """List posts, newest first, each with its live comments.

    Args:
        list_posts_use_case: List posts use case from DI
        forest_id: Only posts in this forest (optional)
        limit: Maximum number of posts to return (1-100)
        offset: Number of posts to skip

    Returns:
        Page of posts with the total count
    """
    return await list_posts_use_case.execute(
        ListPostsRequest(forest_id=forest_id, limit=limit, offset=offset)
    )


@router.get(
    "/{post_id}",
    response_model=GetPostResponse,
    dependencies=[Depends(rate_limit("general"))],
)
async def get_post(
    get_post_use_case: FromDishka[GetPostUseCase],
    post_id: str = Path(min_length=1, max_length=100),
) -> GetPostResponse:
    """Get a post with all of its comments.

    Comments are flat and oldest first. Deleted comments are included as
    "[deleted]" so their replies keep a parent.

    Args:
        get_post_use_case: Get post use case from DI
        post_id: Post ID

    Returns:
        Post and comments

    Raises:
        HTTPException: If post not found
    """
    try:
        return await get_post_use_case.execute(GetPostRequest(post_id=post_id))
    except NotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Post not found",
        )


@router.get(
    "/{post_id}/comments/tree",
    response_model=GetCommentTreeResponse,
    dependencies=[Depends(rate_limit("general"))],
)
async def get_comment_tree(
    get_comment_tree_use_case: FromDishka[GetCommentTreeUseCase],
    post_id: str = Path(min_length=1, max_length=100),
) -> GetCommentTreeResponse:
    """Get a post's comments as a nested reply tree.

    Args:
        get_comment_tree_use_case: Get comment tree use case from DI
        post_id: Post ID

    Returns:
        Root comments with nested replies

    Raises:
        HTTPException: If post not found
    """
    try:
        return await get_comment_tree_use_case.execute(
            GetCommentTreeRequest(post_id=post_id)
        )
    except NotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Post not found",
        )
