"""Forest entity.

A forest groups posts under a shared name. Names are unique.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from grove.domain.model.common import DomainModel, utc_now
from grove.domain.value import ForestId, UserId

# Letters, digits, whitespace and common punctuation
FOREST_NAME_PATTERN = r"^[a-zA-Z0-9\s\-_.,!?()]+$"


class Forest(DomainModel):
    """Named collection of posts."""

    id: ForestId
    name: str = Field(min_length=2, max_length=100, pattern=FOREST_NAME_PATTERN)
    description: Optional[str] = Field(default=None, max_length=1000)
    is_private: bool = False
    creator_id: UserId
    creator_name: str = Field(min_length=1, max_length=255)
    created_at: datetime = Field(default_factory=utc_now)

    @field_validator("description")
    @classmethod
    def blank_description_is_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip()
        return v or None
