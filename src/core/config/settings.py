# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Environment-driven configuration for ChatClassroom.

Each concern has its own BaseSettings class with a dedicated variable
prefix (``DB_``, ``TELEGRAM_``, ``STORAGE_``, ``COURSE_``, ``RATE_LIMIT_``,
``CORS_``, ``API_``). Settings nests them and also reads a local ``.env``.

The FastAPI app receives a Settings object explicitly; get_settings() is
only the default used by the CLI entry point and create_app().

Example:
    >>> settings = get_settings()
    >>> settings.database.url
    'sqlite+aiosqlite:///./classroom.db'
"""

from functools import lru_cache
from typing import Literal, Self

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Storage backend.

    Any SQLAlchemy async URL is accepted. PostgreSQL (asyncpg) is the
    production target; SQLite (aiosqlite) is used for local runs and tests.
    Pool sizing only applies to PostgreSQL. With ``auto_create`` the tables
    are created at startup; turn it off when the schema is managed by
    Alembic.
    """

    model_config = SettingsConfigDict(env_prefix="DB_", extra="ignore")

    url: str = "sqlite+aiosqlite:///./classroom.db"
    pool_size: int = 10
    max_overflow: int = 5
    echo: bool = False
    auto_create: bool = True

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")


class TelegramSettings(BaseSettings):
    """Bot API access for chat notifications.

    Without ``bot_token`` messages are written to the log instead of sent.
    ``webapp_url`` is the public address the bot links to.
    """

    model_config = SettingsConfigDict(env_prefix="TELEGRAM_", extra="ignore")

    bot_token: SecretStr | None = None
    api_base_url: str = "https://api.telegram.org"
    timeout: float = 10.0
    webapp_url: str = "http://localhost:34000"


class StorageSettings(BaseSettings):
    """Uploaded file storage and per-kind size limits in bytes."""

    model_config = SettingsConfigDict(env_prefix="STORAGE_", extra="ignore")

    root: str = "./uploads"
    public_url: str = "/uploads"
    submission_max_bytes: int = 10 * 1024 * 1024
    material_max_bytes: int = 50 * 1024 * 1024


class CourseSettings(BaseSettings):
    """Access code generation and assignment defaults."""

    model_config = SettingsConfigDict(env_prefix="COURSE_", extra="ignore")

    access_code_length: int = Field(default=8, ge=4, le=32)
    access_code_max_attempts: int = Field(default=5, ge=1)
    default_max_points: int = Field(default=100, gt=0)


class RateLimitSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="RATE_LIMIT_", extra="ignore")

    requests_per_minute: int = 60
    storage_uri: str = "memory://"


class CORSSettings(BaseSettings):
    """Browser origins allowed to call the API.

    ``origins`` is a comma separated string so it can be set from a single
    environment variable.
    """

    model_config = SettingsConfigDict(env_prefix="CORS_", extra="ignore")

    origins: str = "http://localhost:34000"
    allow_credentials: bool = False
    allow_methods: list[str] = ["GET", "POST", "PATCH", "DELETE"]
    allow_headers: list[str] = ["Content-Type", "X-Telegram-Id", "X-Request-Id"]

    @property
    def origins_list(self) -> list[str]:
        return [item.strip() for item in self.origins.split(",") if item.strip()]


class APISettings(BaseSettings):
    """Uvicorn bind address and process model."""

    model_config = SettingsConfigDict(env_prefix="API_", extra="ignore")

    host: str = "0.0.0.0"
    port: int = 34000
    workers: int = 1
    reload: bool = False


class Settings(BaseSettings):
    """Root settings object.

    Nested groups are built from their own prefixes, so
    ``DB_URL=... TELEGRAM_BOT_TOKEN=...`` configures a deployment without
    any further wiring. Production refuses to start without a bot token,
    since users would otherwise never hear about grades or announcements.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = False
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    telegram: TelegramSettings = Field(default_factory=TelegramSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    course: CourseSettings = Field(default_factory=CourseSettings)
    rate_limit: RateLimitSettings = Field(default_factory=RateLimitSettings)
    cors: CORSSettings = Field(default_factory=CORSSettings)
    api: APISettings = Field(default_factory=APISettings)

    @model_validator(mode="after")
    def require_bot_token_in_production(self) -> Self:
        if self.is_production and self.telegram.bot_token is None:
            raise ValueError("A Telegram bot token is required in production (TELEGRAM_BOT_TOKEN)")
        return self

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Settings built from the process environment, loaded once."""
    return Settings()


def clear_settings_cache() -> None:
    """Forget the cached Settings so the next get_settings() re-reads the environment."""
    get_settings.cache_clear()
