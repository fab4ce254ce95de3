"""Unit tests for PostService and JWTService."""

import pytest

from grove.domain.service import JWTService, PostService
from grove.domain.value import ForestId, PostId, UserId
from grove.util.jwt import JWTError
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestPostService:
    """Tests for PostService."""

    @pytest.mark.asyncio
    async def test_create_and_fetch_post(self, unit_env):
        # Arrange
        post_service = await unit_env.get(PostService)

        # Act
        post = await post_service.create_post(
            author_id=UserId("author-1"),
            author_name="Alice",
            content="An oak",
            forest_id=ForestId("woods"),
        )

        # Assert
        fetched = await post_service.get_post_by_id(post.id)
        assert fetched == post
        assert fetched.forest_id == "woods"

    @pytest.mark.asyncio
    async def test_missing_post_is_none(self, unit_env):
        post_service = await unit_env.get(PostService)

        assert await post_service.get_post_by_id(PostId("nope")) is None

    @pytest.mark.asyncio
    async def test_image_must_be_image_data_or_http_url(self, unit_env):
        """Other schemes are rejected by the model."""
        post_service = await unit_env.get(PostService)

        with pytest.raises(ValueError):
            await post_service.create_post(
                author_id=UserId("author-1"),
                author_name="Alice",
                content="An oak",
                image_url="javascript:alert(1)",
            )


class TestJWTService:
    """Tests for JWTService."""

    @pytest.mark.asyncio
    async def test_round_trip(self, unit_env):
        jwt_service = await unit_env.get(JWTService)

        token = jwt_service.create_token("author-1", "Alice", avatar="https://a/b.png")
        payload = jwt_service.verify_token(token)

        assert payload.user_id == "author-1"
        assert payload.name == "Alice"
        assert payload.avatar == "https://a/b.png"

    @pytest.mark.asyncio
    async def test_rejects_garbage(self, unit_env):
        jwt_service = await unit_env.get(JWTService)

        with pytest.raises(JWTError):
            jwt_service.verify_token("not-a-token")
