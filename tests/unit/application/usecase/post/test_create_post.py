"""Unit tests for CreatePostUseCase."""

import pytest

from grove.application.usecase.post import CreatePostRequest, CreatePostUseCase
from grove.domain.error import NotFoundError
from grove.domain.repository import ForestRepository, PostRepository
from tests.conftest import make_forest
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestCreatePostUseCase:
    """Tests for CreatePostUseCase."""

    @pytest.mark.asyncio
    async def test_create_post(self, unit_env):
        # Arrange
        forest_repo = await unit_env.get(ForestRepository)
        await forest_repo.save(make_forest("lakeside"))
        use_case = await unit_env.get(CreatePostUseCase)
        post_repo = await unit_env.get(PostRepository)

        # Act
        response = await use_case.execute(
            CreatePostRequest(
                author_id="author-1",
                author_name="Alice",
                content="A birch by the lake",
                forest_id="lakeside",
                image_url="https://cdn.example/birch.jpg",
            )
        )

        # Assert
        stored = await post_repo.find_by_id(response.id)
        assert stored is not None
        assert stored.content == "A birch by the lake"
        assert response.forest_id == "lakeside"
        assert response.model_dump(by_alias=True)["imageUrl"] == (
            "https://cdn.example/birch.jpg"
        )

    @pytest.mark.asyncio
    async def test_unknown_forest(self, unit_env):
        """Posts can only be planted in forests that exist."""
        # Arrange
        use_case = await unit_env.get(CreatePostUseCase)
        post_repo = await unit_env.get(PostRepository)

        # Act / Assert
        with pytest.raises(NotFoundError):
            await use_case.execute(
                CreatePostRequest(
                    author_id="author-1",
                    author_name="Alice",
                    content="Lost",
                    forest_id="nowhere",
                )
            )
        assert await post_repo.count() == 0
