"""Tests for environment-driven settings."""

from __future__ import annotations

import pytest

from people_service.core.settings import (
    AppSettings,
    DatabaseSettings,
    LoggingSettings,
    RedisSettings,
    clear_settings_cache,
    get_db_settings,
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch):
    for name in ("DATABASE_URL", "DSN", "DB_DSN", "DB_BACKEND", "REDIS_URL", "REDIS_ADDRESS"):
        monkeypatch.delenv(name, raising=False)
    clear_settings_cache()
    yield
    clear_settings_cache()


class TestAppSettings:
    def test_defaults(self):
        settings = AppSettings()

        assert settings.port == 8080
        assert settings.request_timeout == 10.0

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("APP_REQUEST_TIMEOUT", "2.5")

        assert AppSettings().request_timeout == 2.5


class TestDatabaseSettings:
    """Tests for DatabaseSettings."""

    def test_default_pool_is_five_plus_twenty_five(self):
        settings = DatabaseSettings()

        assert settings.pool_kwargs()["pool_size"] == 5
        assert settings.pool_kwargs()["max_overflow"] == 25

    def test_dsn_populates_components(self, monkeypatch: pytest.MonkeyPatch):
        """DATABASE_URL is parsed into the individual fields."""
        monkeypatch.setenv("DATABASE_URL", "postgresql+asyncpg://alice:p%40ss@db:6543/people_test")

        settings = DatabaseSettings()

        assert settings.host == "db"
        assert settings.port == 6543
        assert settings.user == "alice"
        assert settings.password.get_secret_value() == "p@ss"
        assert settings.name == "people_test"
        assert settings.driver == "asyncpg"
        assert settings.postgres_url.startswith("postgresql+asyncpg://alice:p%40ss@db:6543/people_test")

    def test_default_driver_is_psycopg(self):
        assert DatabaseSettings().postgres_url.startswith("postgresql+psycopg://")

    def test_sqlite_backend_url(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("DB_BACKEND", "sqlite")
        monkeypatch.setenv("DB_SQLITE_PATH", ":memory:")

        settings = DatabaseSettings()

        assert settings.backend == "sqlite"
        assert settings.sqlite_url == "sqlite+aiosqlite:///:memory:"

    def test_loader_is_cached(self):
        assert get_db_settings() is get_db_settings()


class TestRedisSettings:
    """Tests for RedisSettings."""

    def test_address_is_split_into_host_and_port(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("REDIS_ADDRESS", "cache:6380")

        settings = RedisSettings()

        assert settings.host == "cache"
        assert settings.port == 6380
        assert settings.url == "redis://cache:6380/0"

    def test_address_without_port_is_a_host(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("REDIS_ADDRESS", "cache")

        settings = RedisSettings()

        assert settings.host == "cache"
        assert settings.port == 6379

    def test_url_takes_precedence_over_address(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("REDIS_URL", "redis://:secret@primary:6390/2")
        monkeypatch.setenv("REDIS_ADDRESS", "ignored:1234")

        settings = RedisSettings()

        assert settings.host == "primary"
        assert settings.port == 6390
        assert settings.db == 2
        assert settings.url == "redis://:secret@primary:6390/2"

    def test_pool_decodes_responses(self):
        assert RedisSettings().connection_pool_kwargs()["decode_responses"] is True

    def test_cache_required_by_default(self):
        assert RedisSettings().startup_require_cache is True


class TestLoggingSettings:
    def test_json_toggle(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("LOG_JSON", "false")

        assert LoggingSettings().json_logs is False

    def test_level_is_normalized(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")

        kwargs = LoggingSettings().to_logging_kwargs()

        assert kwargs["log_level"] == "DEBUG"
