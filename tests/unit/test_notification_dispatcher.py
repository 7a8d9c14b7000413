# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for NotificationDispatcher and channel selection."""

import logging

import pytest
from pydantic import SecretStr

from src.core.config.settings import TelegramSettings
from src.infrastructure.notifications import (
    DeliveryStatus,
    LogChannel,
    NotificationDispatcher,
    TelegramChannel,
    create_channel,
)


class TestDispatch:
    """Tests for single message dispatch."""

    @pytest.mark.asyncio
    async def test_dispatch_does_not_wait(self, dispatcher, recording_channel):
        dispatcher.dispatch("2001", "hello")

        assert dispatcher.pending_count == 1
        assert recording_channel.sent == []

        await dispatcher.flush()

        assert dispatcher.pending_count == 0
        assert recording_channel.messages_for("2001") == ["hello"]

    @pytest.mark.asyncio
    async def test_failed_delivery_is_logged(self, dispatcher, recording_channel, caplog):
        recording_channel.failing.add("2001")

        with caplog.at_level(logging.WARNING):
            dispatcher.dispatch("2001", "hello")
            await dispatcher.flush()

        assert "Notification to 2001 failed" in caplog.text
        assert "bot was blocked" in caplog.text

    @pytest.mark.asyncio
    async def test_raising_channel_does_not_propagate(self, dispatcher, recording_channel, caplog):
        recording_channel.raising.add("2001")

        with caplog.at_level(logging.WARNING):
            dispatcher.dispatch("2001", "hello")
            await dispatcher.flush()

        assert "Notification to 2001 raised" in caplog.text
        assert dispatcher.pending_count == 0


class TestBroadcast:
    """Tests for fan-out to many recipients."""

    @pytest.mark.asyncio
    async def test_one_failure_does_not_stop_others(self, dispatcher, recording_channel):
        recording_channel.raising.add("2002")

        count = dispatcher.broadcast(["2001", "2002", "2003"], "Midterm date")
        await dispatcher.flush()

        assert count == 3
        assert sorted(identity for identity, _ in recording_channel.sent) == [
            "2001",
            "2002",
            "2003",
        ]
        assert recording_channel.messages_for("2003") == ["Midterm date"]

    @pytest.mark.asyncio
    async def test_empty_broadcast(self, dispatcher, recording_channel):
        assert dispatcher.broadcast([], "nobody") == 0

        await dispatcher.flush()

        assert recording_channel.sent == []


class TestClose:
    """Tests for shutdown."""

    @pytest.mark.asyncio
    async def test_close_flushes_then_closes_channel(self, dispatcher, recording_channel):
        dispatcher.dispatch("2001", "last words")

        await dispatcher.close()

        assert recording_channel.messages_for("2001") == ["last words"]
        assert recording_channel.closed is True


class TestLogChannel:
    """Tests for the logging fallback channel."""

    @pytest.mark.asyncio
    async def test_send_logs_and_succeeds(self, caplog):
        channel = LogChannel()

        with caplog.at_level(logging.INFO):
            result = await channel.send("2001", "hello")

        assert result.ok
        assert result.status == DeliveryStatus.SENT
        assert "Notification for 2001: hello" in caplog.text

    @pytest.mark.asyncio
    async def test_dispatcher_with_log_channel(self):
        dispatcher = NotificationDispatcher(LogChannel())

        dispatcher.dispatch("2001", "hello")
        await dispatcher.close()

        assert dispatcher.pending_count == 0


class TestCreateChannel:
    """Tests for channel selection from settings."""

    def test_no_token_uses_log_channel(self):
        assert isinstance(create_channel(TelegramSettings(bot_token=None)), LogChannel)

    @pytest.mark.asyncio
    async def test_token_uses_telegram_channel(self):
        channel = create_channel(TelegramSettings(bot_token=SecretStr("123:abc")))

        assert isinstance(channel, TelegramChannel)
        await channel.close()
