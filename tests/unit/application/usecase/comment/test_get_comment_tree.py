"""Unit tests for GetCommentTreeUseCase."""

import pytest

from grove.application.usecase.comment import (
    DELETED_PLACEHOLDER,
    MAX_NESTING,
    GetCommentTreeRequest,
    GetCommentTreeUseCase,
    build_tree_items,
)
from grove.domain.error import NotFoundError
from grove.domain.repository import CommentRepository, PostRepository
from grove.domain.thread import build_tree
from tests.conftest import make_comment, make_post
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestGetCommentTreeUseCase:
    """Tests for GetCommentTreeUseCase."""

    @pytest.mark.asyncio
    async def test_nests_replies_and_redacts_tombstones(self, unit_env):
        """Deleted B keeps its reply C and shows as a placeholder."""
        # Arrange
        post_repo = await unit_env.get(PostRepository)
        comment_repo = await unit_env.get(CommentRepository)
        await post_repo.save(make_post("post-1"))
        await comment_repo.save(make_comment("A", minute=0))
        await comment_repo.save(
            make_comment("B", parent_id="A", minute=1, deleted=True)
        )
        await comment_repo.save(make_comment("C", parent_id="B", minute=2))
        await comment_repo.save(make_comment("D", minute=3))
        use_case = await unit_env.get(GetCommentTreeUseCase)

        # Act
        response = await use_case.execute(GetCommentTreeRequest(post_id="post-1"))

        # Assert
        assert response.total == 4
        assert [c.id for c in response.comments] == ["A", "D"]
        b = response.comments[0].replies[0]
        assert b.content == DELETED_PLACEHOLDER
        assert b.image_url is None
        assert b.deleted_at is not None
        assert [c.id for c in b.replies] == ["C"]

    @pytest.mark.asyncio
    async def test_orphan_becomes_root(self, unit_env):
        # Arrange
        post_repo = await unit_env.get(PostRepository)
        comment_repo = await unit_env.get(CommentRepository)
        await post_repo.save(make_post("post-1"))
        await comment_repo.save(make_comment("O", parent_id="ghost"))
        use_case = await unit_env.get(GetCommentTreeUseCase)

        # Act
        response = await use_case.execute(GetCommentTreeRequest(post_id="post-1"))

        # Assert
        assert [c.id for c in response.comments] == ["O"]

    @pytest.mark.asyncio
    async def test_serializes_camel_case(self, unit_env):
        post_repo = await unit_env.get(PostRepository)
        await post_repo.save(make_post("post-1"))
        use_case = await unit_env.get(GetCommentTreeUseCase)

        response = await use_case.execute(GetCommentTreeRequest(post_id="post-1"))

        assert response.model_dump(by_alias=True) == {
            "postId": "post-1",
            "comments": [],
            "continuations": [],
            "total": 0,
        }

    @pytest.mark.asyncio
    async def test_missing_post(self, unit_env):
        use_case = await unit_env.get(GetCommentTreeUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(GetCommentTreeRequest(post_id="nope"))


class TestBuildTreeItems:
    """Tests for splitting deep trees into shallow response subtrees."""

    def test_replies_past_limit_move_to_continuations(self):
        """With two levels per subtree, C and D continue below B."""
        # Arrange
        roots = build_tree(
            [
                make_comment("A", minute=0),
                make_comment("B", parent_id="A", minute=1),
                make_comment("C", parent_id="B", minute=2),
                make_comment("D", parent_id="B", minute=3),
                make_comment("E", parent_id="C", minute=4),
            ]
        )

        # Act
        items, continuations = build_tree_items(roots, max_nesting=2)

        # Assert
        b = items[0].replies[0]
        assert b.continued
        assert b.replies == []
        assert [c.id for c in continuations] == ["C", "D"]
        assert all(c.parent_id == "B" for c in continuations)
        assert [r.id for r in continuations[0].replies] == ["E"]
        assert not items[0].continued

    def test_long_chain_does_not_recurse(self):
        # Arrange
        roots = build_tree(
            [make_comment("c0")]
            + [
                make_comment(f"c{i}", parent_id=f"c{i - 1}", minute=i)
                for i in range(1, 5000)
            ]
        )

        # Act
        items, continuations = build_tree_items(roots)

        # Assert
        assert len(items) == 1
        assert len(continuations) == 5000 // MAX_NESTING
        assert continuations[-1].parent_id is not None
