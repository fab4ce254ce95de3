"""Forest repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from grove.domain.model.forest import Forest
from grove.domain.value import ForestId


class ForestRepository(ABC):
    """Repository for forests."""

    @abstractmethod
    async def find_by_id(self, forest_id: ForestId) -> Optional[Forest]:
        """Find a forest by ID.

        Args:
            forest_id: The forest's unique identifier

        Returns:
            The forest if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_name(self, name: str) -> Optional[Forest]:
        """Find a forest by its exact name."""
        pass

    @abstractmethod
    async def find_all(self) -> list[Forest]:
        """All forests, newest first."""
        pass

    @abstractmethod
    async def save(self, forest: Forest) -> Forest:
        """Save a forest (create or update).

        Args:
            forest: The forest to save

        Returns:
            The saved forest

        Raises:
            AlreadyExistsError: If another forest has the same name
        """
        pass
