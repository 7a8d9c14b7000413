# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Channel contract for outbound chat messages.

A channel delivers a plain text message to a user's chat identity.
Channels report the outcome as a ChannelResult instead of raising, so a
failed delivery never reaches the code that triggered it.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from src.utils.datetime import utc_now


class ChannelType(str, Enum):
    TELEGRAM = "telegram"
    LOG = "log"


class DeliveryStatus(str, Enum):
    SENT = "sent"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass
class ChannelResult:
    """Outcome of one send call.

    ``error_message`` carries the failure text for FAILED and the reason
    for SKIPPED. ``metadata`` holds channel specific details such as the
    HTTP status returned by the chat service.
    """

    channel: ChannelType
    status: DeliveryStatus
    recipient: str
    message_id: str | None = None
    error_message: str | None = None
    sent_at: datetime = field(default_factory=utc_now)
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status == DeliveryStatus.SENT


class BaseChannel(ABC):
    """Base class for chat delivery channels.

    Subclasses implement ``send`` and build their return value with
    delivered(), failure() or skipped().
    """

    def __init__(self) -> None:
        self.logger = logging.getLogger(f"{__name__}.{type(self).__name__}")

    @property
    @abstractmethod
    def channel_type(self) -> ChannelType:
        ...

    @abstractmethod
    async def send(self, identity: str, text: str) -> ChannelResult:
        """Deliver ``text`` to the chat identified by ``identity``."""
        ...

    async def close(self) -> None:
        """Release transport resources held by the channel."""

    def delivered(
        self,
        identity: str,
        message_id: str | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> ChannelResult:
        return ChannelResult(
            self.channel_type,
            DeliveryStatus.SENT,
            identity,
            message_id=message_id,
            metadata=metadata or {},
        )

    def failure(
        self,
        identity: str,
        error_message: str,
        metadata: dict[str, Any] | None = None,
    ) -> ChannelResult:
        return ChannelResult(
            self.channel_type,
            DeliveryStatus.FAILED,
            identity,
            error_message=error_message,
            metadata=metadata or {},
        )

    def skipped(self, identity: str, reason: str) -> ChannelResult:
        return ChannelResult(self.channel_type, DeliveryStatus.SKIPPED, identity, error_message=reason)
