"""Domain layer DI providers."""

from dishka import Scope, provide

from grove.config import AuthSettings
from grove.domain.repository import (
    CommentRepository,
    ForestRepository,
    PostRepository,
)
from grove.domain.service import (
    CommentService,
    ForestService,
    JWTService,
    PostService,
)
from grove.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_comment_service(
        self, comment_repository: CommentRepository
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(comment_repository=comment_repository)

    @provide
    def get_post_service(self, post_repository: PostRepository) -> PostService:
        """Provide post domain service."""
        return PostService(post_repository=post_repository)

    @provide
    def get_forest_service(
        self, forest_repository: ForestRepository, post_repository: PostRepository
    ) -> ForestService:
        """Provide forest domain service."""
        return ForestService(
            forest_repository=forest_repository, post_repository=post_repository
        )
