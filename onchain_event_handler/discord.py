"""Discord webhook delivery with bounded retries."""

from __future__ import annotations

import asyncio
import re

import httpx

from onchain_event_handler.models import NotificationMessage
from onchain_event_handler.utils.logging import get_logger

log = get_logger(__name__)

DISCORD_WEBHOOK_TIMEOUT_SECONDS = 10.0
RETRYABLE_STATUSES = frozenset({429, 500, 502, 503, 504})

_LINK_TEXT_RE = re.compile(r"\[([^\]]+)\]")


def _is_retryable(error: httpx.HTTPError) -> bool:
    if isinstance(error, httpx.HTTPStatusError):
        return error.response.status_code in RETRYABLE_STATUSES
    # No response at all: connect failures, timeouts, dropped connections
    return isinstance(error, httpx.TransportError)


class DiscordDispatcher:
    """Posts notification embeds to Discord webhook URLs."""

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        max_retries: int = 3,
        base_delay: float = 1.0,
    ) -> None:
        self._client = client or httpx.AsyncClient(timeout=DISCORD_WEBHOOK_TIMEOUT_SECONDS)
        self._max_retries = max_retries
        self._base_delay = base_delay

    async def send(self, webhook_url: str, message: NotificationMessage) -> None:
        """Deliver one message; raises the last httpx error once retries are exhausted."""
        payload = message.to_payload()

        for attempt in range(self._max_retries + 1):
            try:
                resp = await self._client.post(
                    webhook_url,
                    json=payload,
                    timeout=DISCORD_WEBHOOK_TIMEOUT_SECONDS,
                )
                resp.raise_for_status()
                break
            except httpx.HTTPError as e:
                status = e.response.status_code if isinstance(e, httpx.HTTPStatusError) else None
                if attempt == self._max_retries or not _is_retryable(e):
                    log.error(
                        "discord_webhook_error",
                        attempt=attempt + 1,
                        status=status,
                        error=str(e),
                        error_type=type(e).__name__,
                        body=e.response.text[:500] if isinstance(e, httpx.HTTPStatusError) else None,
                    )
                    raise
                wait = self._base_delay * (2 ** attempt)
                log.warning(
                    "discord_webhook_retry",
                    attempt=attempt + 1,
                    status=status,
                    wait=wait,
                )
                await asyncio.sleep(wait)

        tx_field = message.field_value("Transaction Hash") or ""
        match = _LINK_TEXT_RE.search(tx_field)
        log.info(
            "discord_message_sent",
            description=message.description,
            transaction_hash=match.group(1) if match else "unknown",
        )

    async def close(self) -> None:
        await self._client.aclose()
