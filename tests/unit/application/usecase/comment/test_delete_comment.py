"""Unit tests for DeleteCommentUseCase."""

import pytest

from grove.application.usecase.comment import (
    DeleteCommentRequest,
    DeleteCommentUseCase,
)
from grove.domain.error import NotAuthorizedError, NotFoundError
from grove.domain.repository import CommentRepository
from tests.conftest import make_comment
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestDeleteCommentUseCase:
    """Tests for DeleteCommentUseCase."""

    @pytest.mark.asyncio
    async def test_author_delete_tombstones_only_target(self, unit_env):
        """The row stays with deleted_at set and replies are untouched."""
        # Arrange
        comment_repo = await unit_env.get(CommentRepository)
        await comment_repo.save(make_comment("A"))
        await comment_repo.save(make_comment("B", parent_id="A", minute=1))
        use_case = await unit_env.get(DeleteCommentUseCase)

        # Act
        response = await use_case.execute(
            DeleteCommentRequest(comment_id="A", user_id="author-1")
        )

        # Assert
        assert response.success
        a = await comment_repo.find_by_id("A")
        b = await comment_repo.find_by_id("B")
        assert a.deleted_at is not None
        assert a.content == "comment A"
        assert b.deleted_at is None

    @pytest.mark.asyncio
    async def test_delete_is_idempotent(self, unit_env):
        # Arrange
        comment_repo = await unit_env.get(CommentRepository)
        await comment_repo.save(make_comment("A"))
        use_case = await unit_env.get(DeleteCommentUseCase)
        request = DeleteCommentRequest(comment_id="A", user_id="author-1")
        await use_case.execute(request)
        first = await comment_repo.find_by_id("A")

        # Act
        response = await use_case.execute(request)

        # Assert
        assert response.success
        second = await comment_repo.find_by_id("A")
        assert second.deleted_at == first.deleted_at

    @pytest.mark.asyncio
    async def test_non_author_is_refused(self, unit_env):
        # Arrange
        comment_repo = await unit_env.get(CommentRepository)
        await comment_repo.save(make_comment("A"))
        use_case = await unit_env.get(DeleteCommentUseCase)

        # Act & Assert
        with pytest.raises(NotAuthorizedError) as exc_info:
            await use_case.execute(
                DeleteCommentRequest(comment_id="A", user_id="author-2")
            )
        assert exc_info.value.action == "delete"
        assert (await comment_repo.find_by_id("A")).deleted_at is None

    @pytest.mark.asyncio
    async def test_missing_comment(self, unit_env):
        use_case = await unit_env.get(DeleteCommentUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(
                DeleteCommentRequest(comment_id="nope", user_id="author-1")
            )
