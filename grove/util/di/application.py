"""Application layer DI providers."""

from dishka import Scope, provide

from grove.application.usecase.comment import (
    CreateCommentUseCase,
    DeleteCommentUseCase,
    GetCommentTreeUseCase,
    UpdateCommentUseCase,
)
from grove.application.usecase.forest import CreateForestUseCase, ListForestsUseCase
from grove.application.usecase.post import (
    CreatePostUseCase,
    GetPostUseCase,
    ListPostsUseCase,
)
from grove.domain.service import CommentService, ForestService, PostService
from grove.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    scope = Scope.REQUEST

    # Post use cases
    @provide
    def get_create_post_use_case(
        self, post_service: PostService, forest_service: ForestService
    ) -> CreatePostUseCase:
        """Provide create post use case."""
        return CreatePostUseCase(
            post_service=post_service, forest_service=forest_service
        )

    @provide
    def get_list_posts_use_case(
        self, post_service: PostService, comment_service: CommentService
    ) -> ListPostsUseCase:
        """Provide list posts use case."""
        return ListPostsUseCase(
            post_service=post_service, comment_service=comment_service
        )

    @provide
    def get_get_post_use_case(
        self, post_service: PostService, comment_service: CommentService
    ) -> GetPostUseCase:
        """Provide get post use case."""
        return GetPostUseCase(
            post_service=post_service, comment_service=comment_service
        )

    # Comment use cases
    @provide
    def get_create_comment_use_case(
        self, comment_service: CommentService, post_service: PostService
    ) -> CreateCommentUseCase:
        """Provide create comment use case."""
        return CreateCommentUseCase(
            comment_service=comment_service, post_service=post_service
        )

    @provide
    def get_update_comment_use_case(
        self, comment_service: CommentService
    ) -> UpdateCommentUseCase:
        """Provide update comment use case."""
        return UpdateCommentUseCase(comment_service=comment_service)

    @provide
    def get_delete_comment_use_case(
        self, comment_service: CommentService
    ) -> DeleteCommentUseCase:
        """Provide delete comment use case."""
        return DeleteCommentUseCase(comment_service=comment_service)

    @provide
    def get_comment_tree_use_case(
        self, comment_service: CommentService, post_service: PostService
    ) -> GetCommentTreeUseCase:
        """Provide get comment tree use case."""
        return GetCommentTreeUseCase(
            comment_service=comment_service, post_service=post_service
        )

    # Forest use cases
    @provide
    def get_create_forest_use_case(
        self, forest_service: ForestService
    ) -> CreateForestUseCase:
        """Provide create forest use case."""
        return CreateForestUseCase(forest_service=forest_service)

    @provide
    def get_list_forests_use_case(
        self, forest_service: ForestService
    ) -> ListForestsUseCase:
        """Provide list forests use case."""
        return ListForestsUseCase(forest_service=forest_service)
