"""Storage backend settings.

Two interchangeable backends are supported:

- ``postgres``: production engine through SQLAlchemy + psycopg3 with a
  bounded connection pool.
- ``sqlite``: embedded engine through aiosqlite, for local runs and tests.

Supports both DSN-based configuration and individual component fields.
If a full DSN is provided, it's parsed to populate the component fields.
"""

from __future__ import annotations

from typing import Any, Literal
from urllib.parse import quote_plus, unquote, urlparse

from pydantic import AliasChoices, Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

Backend = Literal["postgres", "sqlite"]


class DatabaseSettings(BaseSettings):
    """Storage backend connection and pool settings.

    Environment variables use DB_ prefix. The DSN is also read from
    ``DATABASE_URL`` or ``DSN``.

    Examples:
        DB_BACKEND=postgres DATABASE_URL="postgresql://user:pass@db:5432/people"
        DB_BACKEND=sqlite DB_SQLITE_PATH=./people.db
    """

    backend: Backend = Field(
        default="postgres",
        description="Storage backend: postgres (production) or sqlite (embedded)",
    )

    dsn: str | None = Field(
        default=None,
        validation_alias=AliasChoices("DATABASE_URL", "DSN", "DB_DSN"),
        description="Optional complete PostgreSQL URL; parsed into component fields.",
    )

    # ─────────────────────────────────────────────────────
    # PostgreSQL connection components
    # ─────────────────────────────────────────────────────
    host: str = Field(default="localhost", min_length=1, max_length=255)
    port: int = Field(default=5432, ge=1, le=65535)
    user: str = Field(default="postgres", min_length=1, max_length=100)
    password: SecretStr = Field(default=SecretStr("postgres"))
    name: str = Field(default="people", min_length=1, max_length=100)
    driver: str = Field(
        default="psycopg",
        description="SQLAlchemy async driver for PostgreSQL.",
    )
    application_name: str = Field(default="people-service", min_length=1, max_length=100)

    # ─────────────────────────────────────────────────────
    # SQLite
    # ─────────────────────────────────────────────────────
    sqlite_path: str = Field(
        default="people.db",
        description="SQLite database file (':memory:' for an in-process database).",
    )

    # ─────────────────────────────────────────────────────
    # Connection pool (PostgreSQL). 5 kept + 25 burst = 30 connections max.
    # ─────────────────────────────────────────────────────
    pool_size: int = Field(default=5, ge=1, le=100)
    max_overflow: int = Field(default=25, ge=0, le=100)
    pool_timeout: float = Field(
        default=5.0,
        ge=0.1,
        le=300.0,
        description="Timeout (seconds) when acquiring a connection from the pool.",
    )
    pool_recycle: int = Field(default=1800, ge=0, le=86400)
    pool_pre_ping: bool = Field(default=True)
    echo: bool = Field(default=False, description="Echo SQL statements to logs (debug only).")

    model_config = SettingsConfigDict(
        env_prefix="DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        populate_by_name=True,
        extra="ignore",
        env_ignore_empty=True,
    )

    @model_validator(mode="after")
    def _apply_dsn(self) -> DatabaseSettings:
        """Populate connection components from DSN if provided.

        Uses object.__setattr__ because the model is frozen.
        """
        if not self.dsn:
            return self

        parsed = urlparse(self.dsn)

        if parsed.hostname:
            object.__setattr__(self, "host", parsed.hostname)
        if parsed.port:
            object.__setattr__(self, "port", parsed.port)
        if parsed.username:
            object.__setattr__(self, "user", unquote(parsed.username))
        if parsed.password:
            object.__setattr__(self, "password", SecretStr(unquote(parsed.password)))
        if parsed.path and parsed.path != "/":
            object.__setattr__(self, "name", parsed.path.lstrip("/"))
        if parsed.scheme and "+" in parsed.scheme:
            object.__setattr__(self, "driver", parsed.scheme.split("+")[1])

        return self

    @property
    def postgres_url(self) -> str:
        """SQLAlchemy async URL for PostgreSQL built from component fields."""
        safe_password = quote_plus(self.password.get_secret_value())
        safe_app_name = quote_plus(self.application_name)
        return (
            f"postgresql+{self.driver}://{self.user}:{safe_password}"
            f"@{self.host}:{self.port}/{self.name}?application_name={safe_app_name}"
        )

    @property
    def sqlite_url(self) -> str:
        """SQLAlchemy async URL for SQLite."""
        return f"sqlite+aiosqlite:///{self.sqlite_path}"

    def pool_kwargs(self) -> dict[str, Any]:
        """Return pool keyword arguments for create_async_engine()."""
        return {
            "pool_size": self.pool_size,
            "max_overflow": self.max_overflow,
            "pool_timeout": self.pool_timeout,
            "pool_recycle": self.pool_recycle,
            "pool_pre_ping": self.pool_pre_ping,
        }
