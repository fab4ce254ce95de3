"""Comment entity.

Comments are stored flat: each row points at its parent with ``parent_id``
and the reply tree is rebuilt from the rows in creation order (see
``grove.domain.thread``). Deleting a comment only tombstones its row so
replies below it keep their parent.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from grove.domain.model.common import DomainModel, utc_now
from grove.domain.value import CommentId, ImageUrl, PostId, UserId


class Comment(DomainModel):
    """Comment on a post, or a reply to another comment."""

    id: CommentId
    post_id: PostId
    author_id: UserId
    author_name: str = Field(min_length=1, max_length=255)
    author_avatar: Optional[str] = None
    content: str = Field(min_length=1, max_length=10000)
    parent_id: Optional[CommentId] = None
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

    @property
    def is_edited(self) -> bool:
        """Whether the content changed after creation."""
        return self.updated_at is not None and self.updated_at != self.created_at

    @property
    def is_deleted(self) -> bool:
        """Whether the comment has been tombstoned."""
        return self.deleted_at is not None
