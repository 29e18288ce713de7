"""
Base repository class with common statement helpers.
"""
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Generic, Optional, Type, TypeVar

from sqlalchemy import exists, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from contributions.infra.db.base import Base

# Type variable for model classes
ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Base repository over a shared session factory.

    Each helper opens its own short-lived session, so a repository instance
    holds no connection between calls and can be shared across tasks:
        class ContributionStore(BaseRepository[Contributor]):
            def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
                super().__init__(Contributor, session_factory)

    Helpers raise SQLAlchemy errors unchanged; subclasses decide how to
    report them.
    """

    def __init__(self, model: Type[ModelType], session_factory: async_sessionmaker[AsyncSession]):
        self.model = model
        self.session_factory = session_factory

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Open a session that commits on success and rolls back on error."""
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def exists_where(self, *criteria) -> bool:
        """Check whether any row matches the criteria."""
        stmt = select(exists().where(*criteria))
        async with self.session() as session:
            result = await session.execute(stmt)
            return bool(result.scalar())

    async def first_where(self, *criteria, order_by=None) -> Optional[ModelType]:
        """Get the first matching row, or None."""
        stmt = select(self.model).where(*criteria)
        if order_by is not None:
            stmt = stmt.order_by(order_by)
        stmt = stmt.limit(1)
        async with self.session() as session:
            result = await session.execute(stmt)
            return result.scalars().first()

    async def insert_values(self, **values) -> int:
        """Insert a single row. Returns the number of rows inserted."""
        stmt = insert(self.model).values(**values)
        async with self.session() as session:
            result = await session.execute(stmt)
            return result.rowcount

    async def update_where(self, criteria: tuple, **values) -> int:
        """Update every row matching the criteria. Returns the affected row count."""
        stmt = (
            update(self.model)
            .where(*criteria)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        async with self.session() as session:
            result = await session.execute(stmt)
            return result.rowcount

    async def count(self, *criteria) -> int:
        """Count rows, optionally restricted by criteria."""
        stmt = select(func.count()).select_from(self.model)
        if criteria:
            stmt = stmt.where(*criteria)
        async with self.session() as session:
            result = await session.execute(stmt)
            return result.scalar_one()
