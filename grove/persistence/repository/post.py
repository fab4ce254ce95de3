"""PostgreSQL implementation of Post repository."""

from typing import List, Optional

from sqlalchemy import desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from grove.domain.model import Post
from grove.domain.repository import PostRepository
from grove.domain.value import ForestId, PostId
from grove.persistence.mappers import post_to_dict, row_to_post
from grove.persistence.tables import posts_table


class PostgresPostRepository(PostRepository):
    """PostgreSQL implementation of PostRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        stmt = select(posts_table).where(posts_table.c.id == post_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_post(row._asdict()) if row else None

    async def find_all(
        self,
        forest_id: Optional[ForestId] = None,
        include_deleted: bool = False,
        limit: int = 30,
        offset: int = 0,
    ) -> List[Post]:
        """Find posts, newest first."""
        stmt = select(posts_table)

        if forest_id is not None:
            stmt = stmt.where(posts_table.c.forest_id == forest_id)
        if not include_deleted:
            stmt = stmt.where(posts_table.c.deleted_at.is_(None))

        stmt = (
            stmt.order_by(desc(posts_table.c.created_at), desc(posts_table.c.id))
            .limit(limit)
            .offset(offset)
        )

        result = await self.session.execute(stmt)
        return [row_to_post(row._asdict()) for row in result.fetchall()]

    async def count(
        self, forest_id: Optional[ForestId] = None, include_deleted: bool = False
    ) -> int:
        """Count posts."""
        stmt = select(func.count()).select_from(posts_table)

        if forest_id is not None:
            stmt = stmt.where(posts_table.c.forest_id == forest_id)
        if not include_deleted:
            stmt = stmt.where(posts_table.c.deleted_at.is_(None))

        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def count_by_forest(self) -> dict[ForestId, int]:
        """Live post count per forest."""
        stmt = (
            select(posts_table.c.forest_id, func.count())
            .where(posts_table.c.forest_id.is_not(None))
            .where(posts_table.c.deleted_at.is_(None))
            .group_by(posts_table.c.forest_id)
        )
        result = await self.session.execute(stmt)
        return {ForestId(forest_id): count for forest_id, count in result.all()}

    async def save(self, post: Post) -> Post:
        """Save a post (create or update)."""
        post_dict = post_to_dict(post)
        existing = await self.find_by_id(post.id)

        if existing:
            stmt = (
                posts_table.update()
                .where(posts_table.c.id == post.id)
                .values(**post_dict)
            )
        else:
            stmt = posts_table.insert().values(**post_dict)

        await self.session.execute(stmt)
        await self.session.flush()
        return post
