"""
Database engine and session management.

The engine is built from settings at startup and passed explicitly to
whatever needs it; nothing here holds a module-level engine.
"""
import logging
from typing import Any, Optional

from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import AsyncAdaptedQueuePool, StaticPool

from contributions.config import Settings, get_settings
from contributions.infra.db.errors import DatabaseError
from contributions.infra.db.repositories.contributor import ContributionStore

logger = logging.getLogger(__name__)


def _is_memory_sqlite(database_url: str) -> bool:
    url = make_url(database_url)
    return url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:")


def create_engine(settings: Optional[Settings] = None) -> AsyncEngine:
    """Create the pooled async engine described by settings."""
    settings = settings or get_settings()
    options: dict[str, Any] = {"echo": settings.debug}

    if _is_memory_sqlite(settings.database_url):
        # Every session must see the same in-memory database
        options["poolclass"] = StaticPool
        options["connect_args"] = {"check_same_thread": False}
    else:
        options["poolclass"] = AsyncAdaptedQueuePool
        options["pool_size"] = settings.pool_size
        options["max_overflow"] = settings.max_overflow
        options["pool_timeout"] = settings.pool_timeout

    return create_async_engine(settings.database_url, **options)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to engine."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


async def init_db(engine: AsyncEngine) -> None:
    """Initialize database - create all tables."""
    from contributions.infra.db.base import Base
    # Import all models to register them
    from contributions.infra.db.models import contributor  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


def build_store(engine: AsyncEngine, settings: Optional[Settings] = None) -> ContributionStore:
    """Wrap an engine in a store configured from settings."""
    settings = settings or get_settings()
    return ContributionStore(
        create_session_factory(engine),
        error_policy=settings.write_error_policy,
        exclusive_outcomes=settings.exclusive_outcomes,
    )


async def connect_store(settings: Optional[Settings] = None) -> tuple[AsyncEngine, ContributionStore]:
    """
    Open the engine, create the schema and hand back a ready store.

    The caller owns the returned engine and must dispose of it on shutdown
    (see ``close_db``).

    Raises:
        DatabaseError: If the database cannot be reached or initialized.
    """
    settings = settings or get_settings()
    engine = create_engine(settings)
    logger.info("Connecting to database %s", make_url(settings.database_url).render_as_string(hide_password=True))
    try:
        await init_db(engine)
    except SQLAlchemyError as e:
        logger.error("Unable to initialize database: %s", e)
        await engine.dispose()
        raise DatabaseError.from_exception(e) from e
    logger.info("Database tables initialized")
    return engine, build_store(engine, settings)


async def close_db(engine: AsyncEngine) -> None:
    """Close database connections."""
    await engine.dispose()
