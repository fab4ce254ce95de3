"""List posts use case."""

import logfire
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from grove.application.usecase.base import BaseUseCase
from grove.application.usecase.comment.item import CommentItem
from grove.domain.service import CommentService, PostService
from grove.domain.value import ForestId

from .item import PostItem


class PostFeedItem(PostItem):
    """Post in the feed with its live comments, oldest first."""

    comment_count: int
    comments: list[CommentItem]


class ListPostsRequest(BaseModel):
    """List posts request."""

    forest_id: str | None = None  # Filter by forest
    limit: int = Field(default=30, ge=1, le=100)
    offset: int = Field(default=0, ge=0)


class ListPostsResponse(BaseModel):
    """List posts response."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    posts: list[PostFeedItem]
    total: int
    limit: int
    offset: int


class ListPostsUseCase(BaseUseCase):
    """Use case for the post feed: newest posts first with live comments."""

    def __init__(
        self, post_service: PostService, comment_service: CommentService
    ) -> None:
        """Initialize list posts use case.

        Args:
            post_service: Post domain service
            comment_service: Comment domain service
        """
        self.post_service = post_service
        self.comment_service = comment_service

    async def execute(self, request: ListPostsRequest) -> ListPostsResponse:
        """Execute list posts flow.

        Deleted posts are never listed. Deleted comments are left out of
        each post's comments, so the feed only shows live content.

        Args:
            request: List posts request with filter and pagination

        Returns:
            Page of posts and the total number of matching posts
        """
        with logfire.span(
            "list_posts.execute",
            forest_id=request.forest_id,
            limit=request.limit,
            offset=request.offset,
        ):
            posts, total = await self.post_service.list_posts(
                forest_id=ForestId(request.forest_id) if request.forest_id else None,
                limit=request.limit,
                offset=request.offset,
            )

            # One query for the whole page
            comments = await self.comment_service.get_live_comments_for_posts(
                [post.id for post in posts]
            )

            items = [
                PostFeedItem(
                    **PostItem.from_post(post).model_dump(),
                    comment_count=len(comments[post.id]),
                    comments=[
                        CommentItem.from_comment(c, redact_deleted=False)
                        for c in comments[post.id]
                    ],
                )
                for post in posts
            ]

            logfire.info("Posts listed", count=len(items), total=total)

            return ListPostsResponse(
                posts=items,
                total=total,
                limit=request.limit,
                offset=request.offset,
            )
