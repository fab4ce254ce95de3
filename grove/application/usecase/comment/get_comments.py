"""Get comment tree use case."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from grove.application.usecase.base import BaseUseCase
from grove.domain.error import NotFoundError
from grove.domain.service import CommentService, PostService
from grove.domain.thread import build_tree, count_nodes
from grove.domain.value import PostId

from .item import CommentTreeItem, build_tree_items


class GetCommentTreeRequest(BaseModel):
    """Get comment tree request."""

    post_id: str


class GetCommentTreeResponse(BaseModel):
    """Get comment tree response."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    post_id: str
    comments: list[CommentTreeItem]
    # Subtrees below nodes marked ``continued``, in display order
    continuations: list[CommentTreeItem] = Field(default_factory=list)
    total: int


class GetCommentTreeUseCase(BaseUseCase):
    """Use case for getting the comments of a post as a nested reply tree."""

    def __init__(
        self,
        comment_service: CommentService,
        post_service: PostService,
    ) -> None:
        """Initialize get comment tree use case.

        Args:
            comment_service: Comment domain service
            post_service: Post domain service
        """
        self.comment_service = comment_service
        self.post_service = post_service

    async def execute(self, request: GetCommentTreeRequest) -> GetCommentTreeResponse:
        """Execute get comment tree flow.

        Tombstoned comments stay in the tree so their replies keep a parent.
        Comments whose parent is missing are shown at the top level.

        Args:
            request: Get comment tree request with post ID

        Returns:
            Root comments with nested replies, oldest first at every level.
            Threads nested deeper than ``MAX_NESTING`` carry on in
            ``continuations``.

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
        roots = build_tree(comments)
        items, continuations = build_tree_items(roots)

        return GetCommentTreeResponse(
            post_id=request.post_id,
            comments=items,
            continuations=continuations,
            total=count_nodes(roots),
        )
