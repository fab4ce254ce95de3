"""Create forest use case."""

import logfire
from pydantic import BaseModel

from grove.application.usecase.base import BaseUseCase
from grove.domain.service import ForestService
from grove.domain.value import UserId

from .item import ForestItem


class CreateForestRequest(BaseModel):
    """Create forest request."""

    creator_id: str  # User ID from authenticated user
    creator_name: str
    name: str
    description: str | None = None
    is_private: bool = False


class CreateForestResponse(ForestItem):
    """Create forest response: the stored forest."""


class CreateForestUseCase(BaseUseCase):
    """Use case for creating a forest."""

    def __init__(self, forest_service: ForestService) -> None:
        """Initialize create forest use case.

        Args:
            forest_service: Forest domain service
        """
        self.forest_service = forest_service

    async def execute(self, request: CreateForestRequest) -> CreateForestResponse:
        """Execute create forest flow.

        Args:
            request: Create forest request

        Returns:
            The new forest, with no posts yet

        Raises:
            ValueError: If the name is blank or breaks the naming rules
            AlreadyExistsError: If the name is taken
        """
        with logfire.span("create_forest.execute", creator_id=request.creator_id):
            forest = await self.forest_service.create_forest(
                creator_id=UserId(request.creator_id),
                creator_name=request.creator_name,
                name=request.name,
                description=request.description,
                is_private=request.is_private,
            )
            return CreateForestResponse.from_forest(forest)
