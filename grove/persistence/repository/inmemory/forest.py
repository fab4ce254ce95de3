"""In-memory forest repository for testing."""

from typing import Optional

from grove.domain.error import AlreadyExistsError
from grove.domain.model.forest import Forest
from grove.domain.repository.forest import ForestRepository
from grove.domain.value import ForestId


class InMemoryForestRepository(ForestRepository):
    """In-memory implementation of ForestRepository for testing."""

    def __init__(self) -> None:
        self._forests: dict[ForestId, Forest] = {}

    async def find_by_id(self, forest_id: ForestId) -> Optional[Forest]:
        return self._forests.get(forest_id)

    async def find_by_name(self, name: str) -> Optional[Forest]:
        return next((f for f in self._forests.values() if f.name == name), None)

    async def find_all(self) -> list[Forest]:
        return sorted(self._forests.values(), key=lambda f: f.created_at, reverse=True)

    async def save(self, forest: Forest) -> Forest:
        """Save a forest, keeping names unique like the database does."""
        existing = await self.find_by_name(forest.name)
        if existing is not None and existing.id != forest.id:
            raise AlreadyExistsError("forest", "name", forest.name)
        self._forests[forest.id] = forest
        return forest
