"""
Tests for Settings.
"""
import pytest
from pydantic import ValidationError

from contributions.config import Settings, WriteErrorPolicy, get_settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("DATABASE_URL", "WRITE_ERROR_POLICY", "EXCLUSIVE_OUTCOMES", "POOL_SIZE", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestSettings:

    def test_default_values(self):
        settings = Settings(_env_file=None)
        assert settings.database_url == "sqlite+aiosqlite:///./contributions.db"
        assert settings.write_error_policy == WriteErrorPolicy.IGNORE
        assert settings.exclusive_outcomes is False
        assert settings.pool_size == 5
        assert settings.pool_timeout == 30.0

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///./other.db")
        monkeypatch.setenv("WRITE_ERROR_POLICY", "raise")
        monkeypatch.setenv("EXCLUSIVE_OUTCOMES", "true")

        settings = Settings(_env_file=None)

        assert settings.database_url == "sqlite+aiosqlite:///./other.db"
        assert settings.write_error_policy == WriteErrorPolicy.RAISE
        assert settings.exclusive_outcomes is True

    @pytest.mark.parametrize(
        "url, expected",
        [
            ("sqlite:///./contributions.db", "sqlite+aiosqlite:///./contributions.db"),
            ("sqlite://", "sqlite+aiosqlite://"),
            ("sqlite+aiosqlite:///x.db", "sqlite+aiosqlite:///x.db"),
        ],
    )
    def test_sqlite_url_uses_async_driver(self, url, expected):
        assert Settings(_env_file=None, database_url=url).database_url == expected

    def test_rejects_unknown_policy(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, write_error_policy="retry")

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()
