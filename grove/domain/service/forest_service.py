"""Forest domain service."""

from collections.abc import Mapping, Sequence
from typing import Optional
from uuid import uuid4

import logfire

from grove.domain.error import AlreadyExistsError
from grove.domain.model.common import utc_now
from grove.domain.model.forest import Forest
from grove.domain.repository import ForestRepository, PostRepository
from grove.domain.value import ForestId, UserId

from .base import Service


def sort_by_activity_and_age(
    forests: Sequence[Forest], post_counts: Mapping[ForestId, int]
) -> list[Forest]:
    """Most posts first, oldest first among equals.

    Args:
        forests: Forests to order
        post_counts: Live post count per forest, missing means zero

    Returns:
        A new, sorted list
    """
    return sorted(
        forests,
        key=lambda f: (-post_counts.get(f.id, 0), f.created_at),
    )


class ForestService(Service):
    """Domain service for forest operations."""

    def __init__(
        self, forest_repository: ForestRepository, post_repository: PostRepository
    ) -> None:
        """Initialize forest service.

        Args:
            forest_repository: Forest repository
            post_repository: Post repository, for post counts
        """
        self.forest_repository = forest_repository
        self.post_repository = post_repository

    async def create_forest(
        self,
        creator_id: UserId,
        creator_name: str,
        name: str,
        description: Optional[str] = None,
        is_private: bool = False,
    ) -> Forest:
        """Create a forest.

        Args:
            creator_id: Creator user ID
            creator_name: Creator display name
            name: Forest name, surrounding whitespace is dropped
            description: Optional description
            is_private: Whether the forest is private

        Returns:
            Created forest

        Raises:
            ValueError: If the name is blank or too short
            AlreadyExistsError: If the name is taken
        """
        name = name.strip()
        with logfire.span(
            "forest_service.create_forest",
            creator_id=str(creator_id),
            name=name,
        ):
            if not name:
                raise ValueError("Forest name is required")
            if len(name) < 2:
                raise ValueError("Forest name must be at least 2 characters")

            if await self.forest_repository.find_by_name(name) is not None:
                logfire.warn("Forest name taken", name=name)
                raise AlreadyExistsError("forest", "name", name)

            forest = Forest(
                id=ForestId(str(uuid4())),
                name=name,
                description=description,
                is_private=is_private,
                creator_id=creator_id,
                creator_name=creator_name,
                created_at=utc_now(),
            )
            saved = await self.forest_repository.save(forest)
            logfire.info("Forest created", forest_id=str(saved.id))
            return saved

    async def get_forest_by_id(self, forest_id: ForestId) -> Optional[Forest]:
        with logfire.span("forest_service.get_forest_by_id", forest_id=forest_id):
            return await self.forest_repository.find_by_id(forest_id)

    async def list_forests(self) -> tuple[list[Forest], dict[ForestId, int]]:
        """All forests ordered by activity, with their live post counts."""
        with logfire.span("forest_service.list_forests"):
            forests = await self.forest_repository.find_all()
            post_counts = await self.post_repository.count_by_forest()
            logfire.info("Forests listed", count=len(forests))
            return sort_by_activity_and_age(forests, post_counts), post_counts
