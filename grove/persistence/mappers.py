"""Mappers for converting between database rows and domain models.

Domain models are immutable pydantic models, so rows are mapped by hand
instead of through SQLAlchemy's ORM mapping.
"""

from typing import Any, Dict

from grove.domain.model import Comment, Forest, Post
from grove.domain.value import CommentId, ForestId, PostId, UserId


def row_to_post(row: Dict[str, Any]) -> Post:
    """Convert database row to Post domain model.

    Args:
        row: Database row as dict

    Returns:
        Post domain model
    """
    return Post(
        id=PostId(str(row["id"])),
        author_id=UserId(str(row["author_id"])),
        author_name=row["author_name"],
        content=row["content"],
        forest_id=ForestId(str(row["forest_id"])) if row.get("forest_id") else None,
        image_url=row.get("image_url"),
        created_at=row["created_at"],
        updated_at=row.get("updated_at"),
        deleted_at=row.get("deleted_at"),
    )


def post_to_dict(post: Post) -> Dict[str, Any]:
    """Convert Post domain model to database dict.

    Args:
        post: Post domain model

    Returns:
        Dict suitable for database insertion/update
    """
    return post.model_dump()


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model.

    Args:
        row: Database row as dict

    Returns:
        Comment domain model
    """
    return Comment(
        id=CommentId(str(row["id"])),
        post_id=PostId(str(row["post_id"])),
        author_id=UserId(str(row["author_id"])),
        author_name=row["author_name"],
        author_avatar=row.get("author_avatar"),
        content=row["content"],
        parent_id=CommentId(str(row["parent_id"])) if row.get("parent_id") else None,
        image_url=row.get("image_url"),
        created_at=row["created_at"],
        updated_at=row.get("updated_at"),
        deleted_at=row.get("deleted_at"),
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to database dict.

    Args:
        comment: Comment domain model

    Returns:
        Dict suitable for database insertion/update
    """
    return comment.model_dump()


def row_to_forest(row: Dict[str, Any]) -> Forest:
    """Convert database row to Forest domain model."""
    return Forest(
        id=ForestId(str(row["id"])),
        name=row["name"],
        description=row.get("description"),
        is_private=bool(row.get("is_private", False)),
        creator_id=UserId(str(row["creator_id"])),
        creator_name=row["creator_name"],
        created_at=row["created_at"],
    )


def forest_to_dict(forest: Forest) -> Dict[str, Any]:
    return forest.model_dump()
