# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for application settings."""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from src.core.config.settings import (
    CourseSettings,
    CORSSettings,
    DatabaseSettings,
    Settings,
    StorageSettings,
    TelegramSettings,
    clear_settings_cache,
    get_settings,
)


class TestDatabaseSettings:
    """Tests for DatabaseSettings."""

    def test_default_values(self) -> None:
        """Test default configuration values."""
        settings = DatabaseSettings()

        assert settings.url.startswith("sqlite+aiosqlite://")
        assert settings.is_sqlite is True
        assert settings.pool_size == 10
        assert settings.auto_create is True

    def test_loads_from_environment(self) -> None:
        """Test that settings load from environment variables."""
        env = {"DB_URL": "postgresql+asyncpg://u:p@db/classroom", "DB_ECHO": "true"}

        with patch.dict(os.environ, env, clear=False):
            settings = DatabaseSettings()

        assert settings.url == "postgresql+asyncpg://u:p@db/classroom"
        assert settings.is_sqlite is False
        assert settings.echo is True


class TestStorageSettings:
    """Tests for StorageSettings."""

    def test_upload_limits(self) -> None:
        """Test default submission and material limits."""
        settings = StorageSettings()

        assert settings.submission_max_bytes == 10 * 1024 * 1024
        assert settings.material_max_bytes == 50 * 1024 * 1024


class TestCourseSettings:
    """Tests for CourseSettings."""

    def test_defaults(self) -> None:
        settings = CourseSettings()

        assert settings.access_code_length == 8
        assert settings.access_code_max_attempts == 5
        assert settings.default_max_points == 100

    def test_rejects_non_positive_max_points(self) -> None:
        with pytest.raises(ValidationError):
            CourseSettings(default_max_points=0)


class TestCORSSettings:
    """Tests for CORSSettings."""

    def test_origins_list(self) -> None:
        settings = CORSSettings(origins="https://a.example, https://b.example,")

        assert settings.origins_list == ["https://a.example", "https://b.example"]


class TestSettings:
    """Tests for the aggregated Settings."""

    def test_development_without_bot_token(self) -> None:
        """Development runs without a bot token."""
        settings = Settings(environment="development", telegram=TelegramSettings())

        assert settings.is_development is True
        assert settings.telegram.bot_token is None

    def test_production_requires_bot_token(self) -> None:
        """Production refuses to start without a bot token."""
        with pytest.raises(ValidationError, match="bot token"):
            Settings(environment="production", telegram=TelegramSettings(bot_token=None))

    def test_production_with_bot_token(self) -> None:
        settings = Settings(
            environment="production",
            telegram=TelegramSettings(bot_token="123:abc"),  # type: ignore[arg-type]
        )

        assert settings.is_production is True
        assert settings.telegram.bot_token.get_secret_value() == "123:abc"

    def test_get_settings_is_cached(self) -> None:
        clear_settings_cache()
        try:
            assert get_settings() is get_settings()
        finally:
            clear_settings_cache()
