"""Forest use cases."""

from .create_forest import (
    CreateForestRequest,
    CreateForestResponse,
    CreateForestUseCase,
)
from .item import ForestItem
from .list_forests import (
    ListForestsRequest,
    ListForestsResponse,
    ListForestsUseCase,
)

__all__ = [
    "ForestItem",
    "CreateForestRequest",
    "CreateForestResponse",
    "CreateForestUseCase",
    "ListForestsRequest",
    "ListForestsResponse",
    "ListForestsUseCase",
]
