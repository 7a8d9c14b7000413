# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Fire-and-forget notification dispatch.

Domain services call dispatch() or broadcast() after their own write has
committed. Each message is sent in its own asyncio task, so the triggering
operation returns without waiting for delivery. A failed or raising send is
logged at WARNING level and dropped; it never reaches the caller and never
stops the remaining recipients of a broadcast.

Pending tasks are kept in a set so they are not garbage collected before
they finish. flush() waits for all of them, which tests and the
application shutdown use.

Example:
    dispatcher = NotificationDispatcher(TelegramChannel(bot_token=token))
    dispatcher.broadcast(["42", "43"], "New announcement")
    await dispatcher.flush()
"""

import asyncio
import logging
from typing import Iterable

from src.infrastructure.notifications.channels import BaseChannel, ChannelResult

logger = logging.getLogger(__name__)


class NotificationDispatcher:
    """Sends chat messages in the background through one channel.

    Attributes:
        channel: Channel used for delivery.
    """

    def __init__(self, channel: BaseChannel) -> None:
        self.channel = channel
        self._pending: set[asyncio.Task[None]] = set()

    @property
    def pending_count(self) -> int:
        """Number of sends that have not finished yet."""
        return len(self._pending)

    def dispatch(self, identity: str, text: str) -> None:
        """Schedule one message without waiting for delivery.

        Args:
            identity: External chat identity of the recipient.
            text: Message body.
        """
        task = asyncio.create_task(self._deliver(identity, text))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    def broadcast(self, identities: Iterable[str], text: str) -> int:
        """Schedule the same message for many recipients.

        Args:
            identities: External chat identities.
            text: Message body.

        Returns:
            Number of messages scheduled.
        """
        count = 0
        for identity in identities:
            self.dispatch(identity, text)
            count += 1
        logger.debug("Scheduled broadcast: recipients=%d", count)
        return count

    async def flush(self) -> None:
        """Wait until every scheduled message has been attempted."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    async def close(self) -> None:
        """Flush pending messages and close the channel."""
        await self.flush()
        await self.channel.close()

    async def _deliver(self, identity: str, text: str) -> None:
        try:
            result: ChannelResult = await self.channel.send(identity, text)
        except Exception as e:
            logger.warning("Notification to %s raised: %s", identity, e)
            return

        if not result.ok:
            logger.warning(
                "Notification to %s failed: %s", identity, result.error_message
            )
