"""Post aggregate root.

A post ("tree") is a short text, optionally with an image, that comments
branch from. Posts may belong to a forest.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from grove.domain.model.common import DomainModel, utc_now
from grove.domain.value import ForestId, ImageUrl, PostId, UserId


class Post(DomainModel):
    """Post aggregate root."""

    id: PostId
    author_id: UserId
    author_name: str = Field(min_length=1, max_length=255)
    content: str = Field(min_length=1, max_length=50000)
    forest_id: Optional[ForestId] = None
    image_url: Optional[str] = None
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None

    @field_validator("image_url")
    @classmethod
    def validate_image_url(cls, v: Optional[str]) -> Optional[str]:
        """Validate the attached image reference."""
        if v is None:
            return v
        return ImageUrl(v).root
