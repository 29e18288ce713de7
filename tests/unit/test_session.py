"""
Tests for engine creation and store provisioning.
"""
import pytest
from sqlalchemy import inspect
from sqlalchemy.pool import StaticPool

from contributions.config import Settings, WriteErrorPolicy
from contributions.infra.db.errors import DatabaseError
from contributions.infra.db.session import build_store, close_db, connect_store, create_engine, init_db


class TestCreateEngine:

    def test_memory_database_uses_static_pool(self):
        engine = create_engine(Settings(_env_file=None, database_url="sqlite+aiosqlite://"))
        assert isinstance(engine.pool, StaticPool)

    def test_file_database_uses_bounded_pool(self, tmp_path):
        settings = Settings(
            _env_file=None,
            database_url=f"sqlite+aiosqlite:///{(tmp_path / 'pool.db').as_posix()}",
            pool_size=3,
            pool_timeout=2.5,
        )
        engine = create_engine(settings)
        assert engine.pool.size() == 3
        assert engine.pool.timeout() == 2.5


class TestConnectStore:

    @pytest.mark.asyncio
    async def test_creates_contributors_table(self, settings):
        engine, store = await connect_store(settings)
        try:
            async with engine.connect() as conn:
                columns = await conn.run_sync(
                    lambda sync_conn: [c["name"] for c in inspect(sync_conn).get_columns("contributors")]
                )
            assert columns == ["uid", "started_at", "finished_at", "expired_at"]
            assert await store.has_contributed("alice") is False
        finally:
            await close_db(engine)

    @pytest.mark.asyncio
    async def test_uid_is_not_unique(self, settings):
        engine, _ = await connect_store(settings)
        try:
            async with engine.connect() as conn:
                unique = await conn.run_sync(
                    lambda sync_conn: inspect(sync_conn).get_unique_constraints("contributors")
                )
                indexes = await conn.run_sync(
                    lambda sync_conn: inspect(sync_conn).get_indexes("contributors")
                )
            assert unique == []
            assert [(i["column_names"], bool(i["unique"])) for i in indexes] == [(["uid"], False)]
        finally:
            await close_db(engine)

    @pytest.mark.asyncio
    async def test_init_db_is_idempotent(self, settings):
        engine, store = await connect_store(settings)
        try:
            await store.insert_contributor("alice")
            await init_db(engine)
            assert await store.has_contributed("alice") is True
        finally:
            await close_db(engine)

    @pytest.mark.asyncio
    async def test_in_memory_database_is_shared_between_sessions(self):
        engine, store = await connect_store(Settings(_env_file=None, database_url="sqlite+aiosqlite://"))
        try:
            await store.insert_contributor("alice")
            assert await store.has_contributed("alice") is True
        finally:
            await close_db(engine)

    @pytest.mark.asyncio
    async def test_store_takes_policy_from_settings(self, settings):
        settings = settings.model_copy(
            update={"write_error_policy": WriteErrorPolicy.LOG, "exclusive_outcomes": True}
        )
        engine, store = await connect_store(settings)
        try:
            assert store.error_policy == WriteErrorPolicy.LOG
            assert store.exclusive_outcomes is True
        finally:
            await close_db(engine)

    @pytest.mark.asyncio
    async def test_unreachable_database_raises(self, unreachable_settings):
        with pytest.raises(DatabaseError, match="unable to open database file"):
            await connect_store(unreachable_settings)

    @pytest.mark.asyncio
    async def test_build_store_does_not_touch_database(self, unreachable_settings):
        engine = create_engine(unreachable_settings)
        store = build_store(engine, unreachable_settings)
        try:
            with pytest.raises(DatabaseError):
                await store.has_contributed("alice")
        finally:
            await close_db(engine)
