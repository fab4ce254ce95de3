"""Base use case."""

from abc import ABC, abstractmethod
from typing import Any


class BaseUseCase(ABC):
    """Application step driven by one API endpoint."""

    @abstractmethod
    async def execute(self, request: Any) -> Any:
        pass
