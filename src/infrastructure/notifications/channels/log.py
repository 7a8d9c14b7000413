# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Channel that only logs messages.

Used when no bot token is configured, e.g. in local development.
"""

from src.infrastructure.notifications.channels.base import (
    BaseChannel,
    ChannelResult,
    ChannelType,
)


class LogChannel(BaseChannel):
    """Writes every message to the log instead of delivering it."""

    @property
    def channel_type(self) -> ChannelType:
        """Return the channel type."""
        return ChannelType.LOG

    async def send(self, identity: str, text: str) -> ChannelResult:
        self.logger.info("Notification for %s: %s", identity, text)
        return self.delivered(identity)
