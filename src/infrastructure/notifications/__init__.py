# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Chat notifications.

NotificationDispatcher fans messages out in the background through a
single channel (Telegram, or logging when no bot token is configured).
"""

from typing import TYPE_CHECKING

from src.infrastructure.notifications.channels import (
    BaseChannel,
    ChannelResult,
    ChannelType,
    DeliveryStatus,
    LogChannel,
    TelegramChannel,
)
from src.infrastructure.notifications.service import NotificationDispatcher

if TYPE_CHECKING:
    from src.core.config.settings import TelegramSettings


def create_channel(settings: "TelegramSettings") -> BaseChannel:
    """Build the delivery channel for the given settings.

    Args:
        settings: Telegram settings.

    Returns:
        TelegramChannel when a bot token is set, LogChannel otherwise.
    """
    if settings.bot_token is None:
        return LogChannel()
    return TelegramChannel(
        bot_token=settings.bot_token.get_secret_value(),
        api_base_url=settings.api_base_url,
        timeout=settings.timeout,
    )


__all__ = [
    "BaseChannel",
    "ChannelResult",
    "ChannelType",
    "DeliveryStatus",
    "LogChannel",
    "NotificationDispatcher",
    "TelegramChannel",
    "create_channel",
]
