# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Telegram notification channel using the Bot API.

Messages are sent with ``sendMessage`` where ``chat_id`` is the user's
Telegram id (their external identity). Users who blocked the bot or never
started it produce a 403 from Telegram, reported as a failed result.

Configuration (via environment variables):
- TELEGRAM_BOT_TOKEN: Bot token
- TELEGRAM_API_BASE_URL: Bot API base URL (default: https://api.telegram.org)
- TELEGRAM_TIMEOUT: Request timeout in seconds
"""

import logging

import httpx

from src.infrastructure.notifications.channels.base import (
    BaseChannel,
    ChannelResult,
    ChannelType,
)

logger = logging.getLogger(__name__)

# Telegram rejects longer message texts
MAX_MESSAGE_LENGTH = 4096


class TelegramChannel(BaseChannel):
    """Chat channel backed by the Telegram Bot API.

    Args:
        bot_token: Bot token issued by BotFather.
        api_base_url: Bot API base URL.
        timeout: Request timeout in seconds.
        client: Optional preconfigured httpx client. The caller keeps
            ownership and closes it.
    """

    def __init__(
        self,
        bot_token: str,
        api_base_url: str = "https://api.telegram.org",
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        super().__init__()
        self._url = f"{api_base_url.rstrip('/')}/bot{bot_token}/sendMessage"
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    @property
    def channel_type(self) -> ChannelType:
        """Return the channel type."""
        return ChannelType.TELEGRAM

    async def send(self, identity: str, text: str) -> ChannelResult:
        """Send a message through the Bot API.

        Args:
            identity: Telegram chat id of the recipient.
            text: Message body, truncated to Telegram's limit.

        Returns:
            ChannelResult with delivery status.
        """
        if not identity:
            return self.skipped(identity, "Recipient has no chat identity")

        if len(text) > MAX_MESSAGE_LENGTH:
            text = text[: MAX_MESSAGE_LENGTH - 1] + "…"

        try:
            response = await self._client.post(
                self._url,
                json={"chat_id": identity, "text": text},
            )
        except httpx.HTTPError as e:
            return self.failure(identity, f"Transport error: {e}")

        try:
            body = response.json()
        except ValueError:
            body = {}

        if response.status_code == 200 and body.get("ok"):
            message_id = body.get("result", {}).get("message_id")
            return self.delivered(
                identity,
                message_id=str(message_id) if message_id is not None else None,
            )

        description = body.get("description") or response.text
        return self.failure(
            identity,
            f"Telegram API error {response.status_code}: {description}",
            metadata={"status_code": response.status_code},
        )

    async def close(self) -> None:
        """Close the HTTP client if this channel created it."""
        if self._owns_client:
            await self._client.aclose()
