"""List forests use case."""

from pydantic import BaseModel

from grove.application.usecase.base import BaseUseCase
from grove.domain.service import ForestService

from .item import ForestItem


class ListForestsRequest(BaseModel):
    """List forests request (no parameters)."""


class ListForestsResponse(BaseModel):
    """List forests response."""

    forests: list[ForestItem]


class ListForestsUseCase(BaseUseCase):
    """Use case for listing forests, busiest first."""

    def __init__(self, forest_service: ForestService) -> None:
        self.forest_service = forest_service

    async def execute(self, request: ListForestsRequest) -> ListForestsResponse:
        """Forests with the most live posts first, oldest first on ties."""
        forests, post_counts = await self.forest_service.list_forests()
        return ListForestsResponse(
            forests=[
                ForestItem.from_forest(forest, post_counts.get(forest.id, 0))
                for forest in forests
            ]
        )
