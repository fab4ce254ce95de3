"""Tree form of comments."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from grove.domain.model.comment import Comment
from grove.domain.model.common import DomainModel
from grove.domain.value import CommentId, PostId, UserId


class CommentAuthor(DomainModel):
    """Attribution shown next to a comment."""

    id: UserId
    name: str
    avatar: Optional[str] = None


class CommentNode(DomainModel):
    """A comment together with its replies.

    Nodes are immutable. Tree edits produce new nodes along the changed
    path and reuse every untouched subtree.
    """

    id: CommentId
    post_id: PostId
    content: str
    author: CommentAuthor
    image_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None
    replies: list["CommentNode"] = Field(default_factory=list)

    @classmethod
    def from_record(cls, record: Comment) -> "CommentNode":
        """Create a leaf node from a flat comment record."""
        return cls(
            id=record.id,
            post_id=record.post_id,
            content=record.content,
            author=CommentAuthor(
                id=record.author_id,
                name=record.author_name,
                avatar=record.author_avatar,
            ),
            image_url=record.image_url,
            created_at=record.created_at,
            updated_at=record.updated_at,
            deleted_at=record.deleted_at,
        )

    @property
    def is_edited(self) -> bool:
        """Whether the content changed after creation."""
        return self.updated_at is not None and self.updated_at != self.created_at

    @property
    def is_deleted(self) -> bool:
        """Whether the comment is a tombstone."""
        return self.deleted_at is not None

    @property
    def has_replies(self) -> bool:
        """Whether at least one reply hangs below this node."""
        return bool(self.replies)
