# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pytest configuration and shared fixtures.

This module provides fixtures used across all test types:
- Unit tests
- Integration tests
"""

from types import SimpleNamespace
from uuid import uuid4

import pytest

from src.infrastructure.notifications import (
    BaseChannel,
    ChannelResult,
    ChannelType,
    NotificationDispatcher,
)
from src.utils.datetime import utc_now


# =============================================================================
# Notification Fixtures
# =============================================================================


class RecordingChannel(BaseChannel):
    """Channel that records every message instead of sending it.

    Identities in failing get a failed result, identities in
    raising make send() raise.
    """

    def __init__(self) -> None:
        super().__init__()
        self.sent: list[tuple[str, str]] = []
        self.failing: set[str] = set()
        self.raising: set[str] = set()
        self.closed = False

    @property
    def channel_type(self) -> ChannelType:
        return ChannelType.LOG

    async def send(self, identity: str, text: str) -> ChannelResult:
        self.sent.append((identity, text))
        if identity in self.raising:
            raise RuntimeError(f"connection reset for {identity}")
        if identity in self.failing:
            return self.failure(identity, "Forbidden: bot was blocked by the user")
        return self.delivered(identity)

    async def close(self) -> None:
        self.closed = True

    def messages_for(self, identity: str) -> list[str]:
        return [text for sent_to, text in self.sent if sent_to == identity]


@pytest.fixture
def recording_channel() -> RecordingChannel:
    """Provide a channel that records sent messages."""
    return RecordingChannel()


@pytest.fixture
def dispatcher(recording_channel: RecordingChannel) -> NotificationDispatcher:
    """Provide a dispatcher delivering to the recording channel."""
    return NotificationDispatcher(recording_channel)


# =============================================================================
# Sample Data Fixtures
# =============================================================================


def build_user(role: str = "student", identity: str | None = None) -> SimpleNamespace:
    """Build an in-memory stand-in for a User row."""
    identity = identity or str(uuid4().int)[:9]
    return SimpleNamespace(
        id=str(uuid4()),
        external_identity=identity,
        username=f"user{identity}",
        first_name="Test",
        last_name=None,
        display_name="Test",
        role=role,
        created_at=utc_now(),
    )


@pytest.fixture
def make_user():
    """Provide a factory for in-memory users."""
    return build_user


@pytest.fixture
def sample_teacher() -> SimpleNamespace:
    """Create a sample teacher."""
    return build_user(role="teacher", identity="1001")


@pytest.fixture
def sample_student() -> SimpleNamespace:
    """Create a sample student."""
    return build_user(role="student", identity="2001")


@pytest.fixture
def sample_course(sample_teacher: SimpleNamespace) -> SimpleNamespace:
    """Create a sample course owned by sample_teacher."""
    return SimpleNamespace(
        id=str(uuid4()),
        title="Algo101",
        description=None,
        access_code="ABCD2345",
        teacher_id=sample_teacher.id,
        created_at=utc_now(),
    )


# =============================================================================
# Marker Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test (in-memory SQLite)"
    )
