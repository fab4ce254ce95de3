"""Forest shape shared by the forest use cases."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from grove.domain.model import Forest


class ForestItem(BaseModel):
    """Forest record with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    name: str
    description: str | None = None
    is_private: bool
    creator_id: str
    creator_name: str
    created_at: datetime
    post_count: int = 0

    @classmethod
    def from_forest(cls, forest: Forest, post_count: int = 0) -> "ForestItem":
        return cls(
            id=str(forest.id),
            name=forest.name,
            description=forest.description,
            is_private=forest.is_private,
            creator_id=str(forest.creator_id),
            creator_name=forest.creator_name,
            created_at=forest.created_at,
            post_count=post_count,
        )
