"""Destination resolution per multisig and channel type."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from onchain_event_handler.config import Settings, WebhookPair
from onchain_event_handler.models import ChannelType
from onchain_event_handler.registry import MultisigIdentity


class Router:
    """Maps (multisig, channel type) to a Discord webhook URL.

    All multisigs share the default alerts/events pair unless an override is
    configured for ``key:chain`` or ``key``.
    """

    def __init__(
        self,
        default: WebhookPair,
        overrides: Mapping[str, WebhookPair] | None = None,
    ) -> None:
        self._default = default
        self._overrides = MappingProxyType(dict(overrides or {}))

    @classmethod
    def from_settings(cls, settings: Settings) -> Router:
        return cls(
            WebhookPair(
                alerts=settings.discord_webhook_alerts,
                events=settings.discord_webhook_events,
            ),
            settings.discord_webhook_overrides,
        )

    def webhook_url(self, identity: MultisigIdentity, channel: ChannelType) -> str | None:
        for key in (f"{identity.key}:{identity.chain}", identity.key):
            pair = self._overrides.get(key)
            if pair is not None:
                url = getattr(pair, channel.value)
                if url:
                    return url
        return getattr(self._default, channel.value) or None
