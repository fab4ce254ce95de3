"""Unit tests for the in-memory post and forest repositories."""

import pytest

from grove.domain.error import AlreadyExistsError
from grove.persistence.repository.inmemory import (
    InMemoryForestRepository,
    InMemoryPostRepository,
)
from tests.conftest import make_forest, make_post


class TestInMemoryPostRepository:
    """Tests for InMemoryPostRepository."""

    @pytest.mark.asyncio
    async def test_find_all_newest_first(self):
        # Arrange
        repo = InMemoryPostRepository()
        await repo.save(make_post("a", minute=1))
        await repo.save(make_post("c", minute=3))
        await repo.save(make_post("b", minute=2))

        # Act
        posts = await repo.find_all()

        # Assert
        assert [p.id for p in posts] == ["c", "b", "a"]

    @pytest.mark.asyncio
    async def test_count_by_forest_skips_deleted_and_unforested(self):
        # Arrange
        repo = InMemoryPostRepository()
        await repo.save(make_post("a", forest_id="f1"))
        await repo.save(make_post("b", forest_id="f1"))
        await repo.save(make_post("c"))
        gone = make_post("d", forest_id="f2")
        await repo.save(gone.model_copy(update={"deleted_at": gone.created_at}))

        # Act
        counts = await repo.count_by_forest()

        # Assert
        assert counts == {"f1": 2}


class TestInMemoryForestRepository:
    """Tests for InMemoryForestRepository."""

    @pytest.mark.asyncio
    async def test_names_are_unique(self):
        repo = InMemoryForestRepository()
        await repo.save(make_forest("f1", name="Cedars"))

        with pytest.raises(AlreadyExistsError):
            await repo.save(make_forest("f2", name="Cedars"))

    @pytest.mark.asyncio
    async def test_find_all_newest_first(self):
        # Arrange
        repo = InMemoryForestRepository()
        await repo.save(make_forest("old", minute=0))
        await repo.save(make_forest("new", minute=5))

        # Act
        forests = await repo.find_all()

        # Assert
        assert [f.id for f in forests] == ["new", "old"]
        assert (await repo.find_by_name("Forest old")).id == "old"
