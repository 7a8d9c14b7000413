# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Notification channels for delivering chat messages.

- TelegramChannel: Sends messages through the Telegram Bot API
- LogChannel: Logs messages (no bot token configured)

Usage:
    from src.infrastructure.notifications.channels import TelegramChannel

    channel = TelegramChannel(bot_token="123:abc")
    result = await channel.send("42", "Hello!")
"""

from src.infrastructure.notifications.channels.base import (
    BaseChannel,
    ChannelResult,
    ChannelType,
    DeliveryStatus,
)
from src.infrastructure.notifications.channels.log import LogChannel
from src.infrastructure.notifications.channels.telegram import TelegramChannel

__all__ = [
    # Base types
    "BaseChannel",
    "ChannelResult",
    "ChannelType",
    "DeliveryStatus",
    # Channels
    "LogChannel",
    "TelegramChannel",
]
