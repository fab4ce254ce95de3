"""Create post use case."""

import logfire
from pydantic import BaseModel

from grove.application.usecase.base import BaseUseCase
from grove.domain.error import NotFoundError
from grove.domain.service import ForestService, PostService
from grove.domain.value import ForestId, UserId

from .item import PostItem


class CreatePostRequest(BaseModel):
    """Create post request."""

    author_id: str  # User ID from authenticated user
    author_name: str  # Display name from authenticated user
    content: str
    forest_id: str | None = None
    image_url: str | None = None


class CreatePostResponse(PostItem):
    """Create post response: the stored post."""


class CreatePostUseCase(BaseUseCase):
    """Use case for creating a new post."""

    def __init__(
        self, post_service: PostService, forest_service: ForestService
    ) -> None:
        """Initialize create post use case.

        Args:
            post_service: Post domain service
            forest_service: Forest domain service
        """
        self.post_service = post_service
        self.forest_service = forest_service

    async def execute(self, request: CreatePostRequest) -> CreatePostResponse:
        """Execute create post flow.

        Args:
            request: Create post request

        Returns:
            Create post response with post details

        Raises:
            pydantic.ValidationError: If the post violates content rules
            NotFoundError: If the forest doesn't exist
        """
        with logfire.span(
            "create_post.execute",
            author_id=request.author_id,
            forest_id=request.forest_id,
        ):
            forest_id = ForestId(request.forest_id) if request.forest_id else None
            if forest_id is not None:
                forest = await self.forest_service.get_forest_by_id(forest_id)
                if forest is None:
                    raise NotFoundError("Forest", forest_id)

            post = await self.post_service.create_post(
                author_id=UserId(request.author_id),
                author_name=request.author_name,
                content=request.content,
                forest_id=forest_id,
                image_url=request.image_url,
            )

            logfire.info("Post created successfully", post_id=str(post.id))

            return CreatePostResponse.from_post(post)
