# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Configuration loaded from environment variables."""

from src.core.config.settings import (
    APISettings,
    CORSSettings,
    CourseSettings,
    DatabaseSettings,
    RateLimitSettings,
    Settings,
    StorageSettings,
    TelegramSettings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    "APISettings",
    "CORSSettings",
    "CourseSettings",
    "DatabaseSettings",
    "RateLimitSettings",
    "Settings",
    "StorageSettings",
    "TelegramSettings",
    "clear_settings_cache",
    "get_settings",
]
