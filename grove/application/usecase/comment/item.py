"""Comment shapes shared by the comment use cases.

Items are serialized with camelCase keys, the layout clients read.
"""

from collections.abc import Sequence
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from grove.domain.model import Comment
from grove.domain.thread import CommentNode
from grove.domain.value import CommentId, PostId, UserId

# Shown in place of the text of a tombstoned comment
DELETED_PLACEHOLDER = "[deleted]"

# Nesting levels per response subtree, deeper replies continue in a new one
MAX_NESTING = 32


class CommentItem(BaseModel):
    """Flat comment record."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    post_id: str
    author_id: str
    author_name: str
    author_avatar: str | None = None
    content: str
    parent_id: str | None = None
    image_url: str | None = None
    created_at: datetime
    updated_at: datetime | None = None
    deleted_at: datetime | None = None

    @classmethod
    def from_comment(
        cls, comment: Comment, redact_deleted: bool = True
    ) -> "CommentItem":
        """Build an item, hiding the text and image of tombstones."""
        deleted = redact_deleted and comment.is_deleted
        return cls(
            id=str(comment.id),
            post_id=str(comment.post_id),
            author_id=str(comment.author_id),
            author_name=comment.author_name,
            author_avatar=comment.author_avatar,
            content=DELETED_PLACEHOLDER if deleted else comment.content,
            parent_id=str(comment.parent_id) if comment.parent_id else None,
            image_url=None if deleted else comment.image_url,
            created_at=comment.created_at,
            updated_at=comment.updated_at,
            deleted_at=comment.deleted_at,
        )

    def to_comment(self) -> Comment:
        """Convert back to a domain record."""
        return Comment(
            id=CommentId(self.id),
            post_id=PostId(self.post_id),
            author_id=UserId(self.author_id),
            author_name=self.author_name,
            author_avatar=self.author_avatar,
            content=self.content,
            parent_id=CommentId(self.parent_id) if self.parent_id else None,
            image_url=self.image_url,
            created_at=self.created_at,
            updated_at=self.updated_at,
            deleted_at=self.deleted_at,
        )


class CommentAuthorItem(BaseModel):
    """Author attribution of a tree node."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    name: str
    avatar: str | None = None


class CommentTreeItem(BaseModel):
    """Comment with its nested replies.

    ``continued`` marks a node whose replies were cut off by the nesting
    limit. Those replies are sent as separate subtrees whose ``parentId``
    points back at this node.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    post_id: str
    parent_id: str | None = None
    content: str
    author: CommentAuthorItem
    image_url: str | None = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None
    is_edited: bool = False
    continued: bool = False
    replies: list["CommentTreeItem"] = Field(default_factory=list)

    @classmethod
    def from_node(
        cls, node: CommentNode, parent_id: Optional[CommentId] = None
    ) -> "CommentTreeItem":
        """Convert a single node. Replies are left empty."""
        return cls(
            id=str(node.id),
            post_id=str(node.post_id),
            parent_id=str(parent_id) if parent_id is not None else None,
            content=DELETED_PLACEHOLDER if node.is_deleted else node.content,
            author=CommentAuthorItem(
                id=str(node.author.id),
                name=node.author.name,
                avatar=node.author.avatar,
            ),
            image_url=None if node.is_deleted else node.image_url,
            created_at=node.created_at,
            updated_at=node.updated_at,
            deleted_at=node.deleted_at,
            is_edited=node.is_edited,
        )


def build_tree_items(
    roots: Sequence[CommentNode], max_nesting: int = MAX_NESTING
) -> tuple[list[CommentTreeItem], list[CommentTreeItem]]:
    """Convert a comment tree into response items without recursion.

    Args:
        roots: Root nodes of the tree
        max_nesting: Levels kept inside one subtree

    Returns:
        Root items, and the continuation subtrees in display order
    """
    items: list[CommentTreeItem] = []
    continuations: list[CommentTreeItem] = []

    # (node, its parent's id, list it belongs to, level inside its subtree)
    stack: list[
        tuple[CommentNode, Optional[CommentId], list[CommentTreeItem], int]
    ] = [(root, None, items, 0) for root in reversed(roots)]
    while stack:
        node, parent_id, siblings, level = stack.pop()
        item = CommentTreeItem.from_node(node, parent_id)
        siblings.append(item)

        if not node.replies:
            continue
        if level + 1 < max_nesting:
            target, child_level = item.replies, level + 1
        else:
            item.continued = True
            target, child_level = continuations, 0
        stack.extend(
            (reply, node.id, target, child_level) for reply in reversed(node.replies)
        )

    return items, continuations
