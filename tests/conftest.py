"""Test configuration and fixtures."""

import os
from datetime import datetime, timedelta, timezone
from uuid import uuid4

import logfire

os.environ.setdefault("ENVIRONMENT", "test")

from grove.config import AuthSettings  # noqa: E402
from grove.domain.model import Comment, Forest, Post  # noqa: E402
from grove.domain.value import CommentId, ForestId, PostId, UserId  # noqa: E402
from grove.util.jwt import create_token  # noqa: E402

# Spans stay local during tests
logfire.configure(send_to_logfire=False, console=False)

BASE_TIME = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


def make_post(
    post_id: str | None = None,
    author_id: str = "author-1",
    content: str = "A small tree",
    forest_id: str | None = None,
    minute: int = 0,
) -> Post:
    """Helper building a post created ``minute`` minutes after BASE_TIME."""
    created_at = BASE_TIME + timedelta(minutes=minute)
    return Post(
        id=PostId(post_id or str(uuid4())),
        author_id=UserId(author_id),
        author_name=f"name-{author_id}",
        content=content,
        forest_id=ForestId(forest_id) if forest_id else None,
        created_at=created_at,
        updated_at=created_at,
    )


def make_forest(
    forest_id: str,
    name: str | None = None,
    creator_id: str = "author-1",
    minute: int = 0,
) -> Forest:
    """Helper building a forest created ``minute`` minutes after BASE_TIME."""
    return Forest(
        id=ForestId(forest_id),
        name=name or f"Forest {forest_id}",
        creator_id=UserId(creator_id),
        creator_name=f"name-{creator_id}",
        created_at=BASE_TIME + timedelta(minutes=minute),
    )


def make_comment(
    comment_id: str,
    parent_id: str | None = None,
    post_id: str = "post-1",
    author_id: str = "author-1",
    content: str | None = None,
    minute: int = 0,
    deleted: bool = False,
) -> Comment:
    """Helper building a comment created ``minute`` minutes after BASE_TIME."""
    created_at = BASE_TIME + timedelta(minutes=minute)
    return Comment(
        id=CommentId(comment_id),
        post_id=PostId(post_id),
        author_id=UserId(author_id),
        author_name=f"name-{author_id}",
        content=content or f"comment {comment_id}",
        parent_id=CommentId(parent_id) if parent_id else None,
        created_at=created_at,
        updated_at=created_at,
        deleted_at=created_at + timedelta(seconds=30) if deleted else None,
    )


def make_token(user_id: str = "author-1", name: str | None = None) -> str:
    """Session token signed with the default test settings."""
    return create_token(user_id, name or f"name-{user_id}", AuthSettings())
