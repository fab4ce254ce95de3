"""In-memory post repository for testing."""

from collections import Counter
from typing import Optional

from grove.domain.model.post import Post
from grove.domain.repository.post import PostRepository
from grove.domain.value import ForestId, PostId


class InMemoryPostRepository(PostRepository):
    """In-memory implementation of PostRepository for testing."""

    def __init__(self) -> None:
        self._posts: dict[PostId, Post] = {}

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        return self._posts.get(post_id)

    async def find_all(
        self,
        forest_id: Optional[ForestId] = None,
        include_deleted: bool = False,
        limit: int = 30,
        offset: int = 0,
    ) -> list[Post]:
        """Find posts, newest first."""
        posts = self._filter(forest_id, include_deleted)
        # Stable sort: newer insertions first among equal timestamps
        posts = list(reversed(posts))
        posts.sort(key=lambda p: p.created_at, reverse=True)
        return posts[offset : offset + limit]

    async def count(
        self, forest_id: Optional[ForestId] = None, include_deleted: bool = False
    ) -> int:
        """Count posts."""
        return len(self._filter(forest_id, include_deleted))

    async def count_by_forest(self) -> dict[ForestId, int]:
        """Live post count per forest."""
        return dict(
            Counter(
                p.forest_id
                for p in self._posts.values()
                if p.forest_id is not None and p.deleted_at is None
            )
        )

    async def save(self, post: Post) -> Post:
        """Save or update a post."""
        self._posts[post.id] = post
        return post

    def _filter(
        self, forest_id: Optional[ForestId], include_deleted: bool
    ) -> list[Post]:
        return [
            p
            for p in self._posts.values()
            if (forest_id is None or p.forest_id == forest_id)
            and (include_deleted or p.deleted_at is None)
        ]
