"""Unit tests for ListPostsUseCase."""

import pytest

from grove.application.usecase.post import ListPostsRequest, ListPostsUseCase
from grove.domain.repository import CommentRepository, PostRepository
from tests.conftest import make_comment, make_post
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestListPostsUseCase:
    """Tests for ListPostsUseCase."""

    @pytest.mark.asyncio
    async def test_newest_first_with_live_comments(self, unit_env):
        # Arrange
        post_repo = await unit_env.get(PostRepository)
        comment_repo = await unit_env.get(CommentRepository)
        await post_repo.save(make_post("old", minute=0))
        await post_repo.save(make_post("new", minute=10))
        await comment_repo.save(make_comment("A", post_id="old", minute=1))
        await comment_repo.save(
            make_comment("B", parent_id="A", post_id="old", minute=2)
        )
        await comment_repo.save(
            make_comment("gone", post_id="old", minute=3, deleted=True)
        )
        use_case = await unit_env.get(ListPostsUseCase)

        # Act
        response = await use_case.execute(ListPostsRequest())

        # Assert
        assert [p.id for p in response.posts] == ["new", "old"]
        assert response.total == 2
        old = response.posts[1]
        assert old.comment_count == 2
        assert [c.id for c in old.comments] == ["A", "B"]
        assert response.posts[0].comments == []

    @pytest.mark.asyncio
    async def test_skips_deleted_posts(self, unit_env):
        # Arrange
        post_repo = await unit_env.get(PostRepository)
        post = make_post("p1")
        await post_repo.save(post.model_copy(update={"deleted_at": post.created_at}))
        use_case = await unit_env.get(ListPostsUseCase)

        # Act
        response = await use_case.execute(ListPostsRequest())

        # Assert
        assert response.posts == []
        assert response.total == 0

    @pytest.mark.asyncio
    async def test_forest_filter_and_paging(self, unit_env):
        # Arrange
        post_repo = await unit_env.get(PostRepository)
        for minute in range(5):
            await post_repo.save(
                make_post(f"w{minute}", forest_id="woods", minute=minute)
            )
        await post_repo.save(make_post("elsewhere", minute=9))
        use_case = await unit_env.get(ListPostsUseCase)

        # Act
        response = await use_case.execute(
            ListPostsRequest(forest_id="woods", limit=2, offset=1)
        )

        # Assert
        assert [p.id for p in response.posts] == ["w3", "w2"]
        assert response.total == 5
        assert response.model_dump(by_alias=True)["posts"][0]["forestId"] == "woods"

    def test_limit_is_bounded(self):
        with pytest.raises(ValueError):
            ListPostsRequest(limit=101)
