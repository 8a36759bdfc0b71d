"""Publishes session reports to a Discord channel through an incoming webhook."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

import httpx

import discord
from rl_session.domain.errors import PublishError
from rl_session.domain.result import Err, Ok, Result
from rl_session.publish._retry import default_http_retry

logger = logging.getLogger(__name__)

BOT_NAME = "Rocket League Session"
EMBED_DESCRIPTION_LIMIT = 4096

_DEFAULT_RETRY = default_http_retry("discord_webhook")


class DiscordWebhookPublisher:
    """Posts each report as the description of a Discord embed.

    Transport failures, rate limits and server errors are retried; other
    rejections fail at once. Either way the failure is returned as
    ``Err(PublishError)``.
    """

    def __init__(
        self,
        url: str,
        *,
        username: str = BOT_NAME,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
        retry: Callable[..., Callable[..., Any]] = _DEFAULT_RETRY,
    ) -> None:
        self._url = url
        self._username = username
        self._client = client or httpx.AsyncClient(timeout=httpx.Timeout(timeout, connect=5.0))
        self._post_with_retry = retry(self._do_post)

    async def __aenter__(self) -> DiscordWebhookPublisher:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def publish(self, text: str) -> Result[None, PublishError]:
        embed = discord.Embed(description=_truncate_description(text))
        result = await self._send(embed)
        if isinstance(result, Ok):
            logger.info("Sent stats to discord")
        return result

    async def announce(self, title: str, description: str) -> Result[None, PublishError]:
        return await self._send(discord.Embed(title=title, description=_truncate_description(description)))

    async def _send(self, embed: discord.Embed) -> Result[None, PublishError]:
        payload = {"username": self._username, "embeds": [embed.to_dict()]}
        try:
            await self._post_with_retry(payload)
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.error("Discord webhook rejected message: %s", status)
            return Err(PublishError(message=f"Webhook returned {status}", status_code=status))
        except httpx.HTTPError as e:
            logger.error("Failed to send message to discord webhook: %s", e)
            return Err(PublishError(message=f"Webhook request failed: {e}"))
        return Ok(None)

    async def _do_post(self, payload: dict[str, Any]) -> None:
        response = await self._client.post(self._url, json=payload)
        response.raise_for_status()


def _truncate_description(content: str, max_length: int = EMBED_DESCRIPTION_LIMIT) -> str:
    if len(content) <= max_length:
        return content
    return content[: max_length - 3] + "..."
