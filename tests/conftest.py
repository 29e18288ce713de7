"""
Shared fixtures: stores backed by a throwaway SQLite file per test.
"""
from pathlib import Path

import pytest
import pytest_asyncio

from contributions.config import Settings
from contributions.infra.db.session import close_db, connect_store, create_engine


def sqlite_url(path: Path) -> str:
    return f"sqlite+aiosqlite:///{path.as_posix()}"


# Parent directory does not exist, so SQLite cannot open the file
UNREACHABLE_URL = "sqlite+aiosqlite:////nonexistent-contributions-dir/missing/contributions.db"


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(_env_file=None, database_url=sqlite_url(tmp_path / "contributions.db"))


@pytest.fixture
def unreachable_settings() -> Settings:
    return Settings(_env_file=None, database_url=UNREACHABLE_URL)


@pytest_asyncio.fixture
async def engine(settings):
    """Engine with the schema created."""
    engine, _ = await connect_store(settings)
    yield engine
    await close_db(engine)


@pytest_asyncio.fixture
async def store(settings):
    engine, store = await connect_store(settings)
    yield store
    await close_db(engine)


@pytest_asyncio.fixture
async def bare_engine(settings):
    """Engine on a database where the contributors table was never created."""
    engine = create_engine(settings)
    yield engine
    await close_db(engine)
