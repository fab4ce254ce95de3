"""Unit tests for CreateCommentUseCase."""

import pytest

from grove.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentUseCase,
)
from grove.domain.error import NotFoundError
from grove.domain.repository import CommentRepository, PostRepository
from tests.conftest import make_comment, make_post
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


def request(**overrides) -> CreateCommentRequest:
    data = {
        "post_id": "post-1",
        "content": "Nice tree",
        "author_id": "author-1",
        "author_name": "Alice",
    }
    data.update(overrides)
    return CreateCommentRequest(**data)


class TestCreateCommentUseCase:
    """Tests for CreateCommentUseCase."""

    @pytest.mark.asyncio
    async def test_returns_stored_record(self, unit_env):
        """The response carries the full record, author from the token."""
        # Arrange
        post_repo = await unit_env.get(PostRepository)
        await post_repo.save(make_post("post-1"))
        use_case = await unit_env.get(CreateCommentUseCase)

        # Act
        response = await use_case.execute(
            request(author_avatar="https://cdn.example/alice.png")
        )

        # Assert
        assert response.id
        assert response.post_id == "post-1"
        assert response.author_id == "author-1"
        assert response.author_name == "Alice"
        assert response.author_avatar == "https://cdn.example/alice.png"
        assert response.parent_id is None
        assert response.deleted_at is None
        dumped = response.model_dump(by_alias=True)
        assert "postId" in dumped and "authorName" in dumped

    @pytest.mark.asyncio
    async def test_reply_to_existing_comment(self, unit_env):
        # Arrange
        post_repo = await unit_env.get(PostRepository)
        comment_repo = await unit_env.get(CommentRepository)
        await post_repo.save(make_post("post-1"))
        await comment_repo.save(make_comment("A"))
        use_case = await unit_env.get(CreateCommentUseCase)

        # Act
        response = await use_case.execute(request(parent_id="A"))

        # Assert
        assert response.parent_id == "A"

    @pytest.mark.asyncio
    async def test_missing_post_raises_not_found(self, unit_env):
        use_case = await unit_env.get(CreateCommentUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(request(post_id="nope"))

    @pytest.mark.asyncio
    async def test_deleted_post_raises_not_found(self, unit_env):
        # Arrange
        post_repo = await unit_env.get(PostRepository)
        post = make_post("post-1")
        await post_repo.save(post.model_copy(update={"deleted_at": post.created_at}))
        use_case = await unit_env.get(CreateCommentUseCase)

        # Act & Assert
        with pytest.raises(NotFoundError):
            await use_case.execute(request())

    @pytest.mark.asyncio
    async def test_parent_on_other_post_is_rejected(self, unit_env):
        # Arrange
        post_repo = await unit_env.get(PostRepository)
        comment_repo = await unit_env.get(CommentRepository)
        await post_repo.save(make_post("post-1"))
        await comment_repo.save(make_comment("X", post_id="post-2"))
        use_case = await unit_env.get(CreateCommentUseCase)

        # Act & Assert
        with pytest.raises(ValueError):
            await use_case.execute(request(parent_id="X"))
