"""PostgreSQL implementation of Forest repository."""

from typing import List, Optional

from sqlalchemy import desc, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from grove.domain.error import AlreadyExistsError
from grove.domain.model import Forest
from grove.domain.repository import ForestRepository
from grove.domain.value import ForestId
from grove.persistence.mappers import forest_to_dict, row_to_forest
from grove.persistence.tables import forests_table


class PostgresForestRepository(ForestRepository):
    """PostgreSQL implementation of ForestRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, forest_id: ForestId) -> Optional[Forest]:
        """Find a forest by ID."""
        stmt = select(forests_table).where(forests_table.c.id == forest_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_forest(row._asdict()) if row else None

    async def find_by_name(self, name: str) -> Optional[Forest]:
        """Find a forest by name."""
        stmt = select(forests_table).where(forests_table.c.name == name)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_forest(row._asdict()) if row else None

    async def find_all(self) -> List[Forest]:
        """All forests, newest first."""
        stmt = select(forests_table).order_by(
            desc(forests_table.c.created_at), forests_table.c.id
        )
        result = await self.session.execute(stmt)
        return [row_to_forest(row._asdict()) for row in result.fetchall()]

    async def save(self, forest: Forest) -> Forest:
        """Save a forest (create or update).

        The unique index on ``name`` settles races between two creators.
        """
        forest_dict = forest_to_dict(forest)
        existing = await self.find_by_id(forest.id)

        if existing:
            stmt = (
                forests_table.update()
                .where(forests_table.c.id == forest.id)
                .values(**forest_dict)
            )
        else:
            stmt = forests_table.insert().values(**forest_dict)

        try:
            # Savepoint so a duplicate name leaves the session usable
            async with self.session.begin_nested():
                await self.session.execute(stmt)
        except IntegrityError as e:
            raise AlreadyExistsError("forest", "name", forest.name) from e

        return forest
