"""Typed models for webhook batches and Discord notifications."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping

_CORE_KEYS = frozenset(
    {"address", "name", "transactionHash", "blockHash", "blockNumber", "logIndex"}
)


class ChannelType(str, Enum):
    ALERTS = "alerts"
    EVENTS = "events"


@dataclass(frozen=True)
class DecodedLogEvent:
    """One decoded on-chain log entry as delivered by QuickNode."""

    address: str
    name: str
    transaction_hash: str
    block_hash: str = ""
    block_number: str = ""
    log_index: str = ""
    params: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_dict(cls, raw: Any) -> DecodedLogEvent | None:
        """Build an event from a raw log dict, or None if it is malformed."""
        if not isinstance(raw, dict):
            return None
        address = raw.get("address")
        name = raw.get("name")
        tx_hash = raw.get("transactionHash")
        for value in (address, name, tx_hash):
            if not isinstance(value, str) or not value:
                return None

        params = {k: v for k, v in raw.items() if k not in _CORE_KEYS}
        return cls(
            address=address,
            name=name,
            transaction_hash=tx_hash,
            block_hash=str(raw.get("blockHash") or ""),
            block_number=str(raw.get("blockNumber") or ""),
            log_index=str(raw.get("logIndex") or ""),
            params=MappingProxyType(params),
        )

    def get_str(self, key: str) -> str | None:
        """Return a decoded parameter if it is a non-empty string."""
        value = self.params.get(key)
        if isinstance(value, str) and value:
            return value
        return None


@dataclass(frozen=True)
class WebhookBatch:
    events: tuple[DecodedLogEvent, ...]
    total: int
    network: str | None = None


@dataclass(frozen=True)
class EmbedField:
    name: str
    value: str
    inline: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "value": self.value, "inline": self.inline}


@dataclass(frozen=True)
class NotificationMessage:
    title: str
    description: str
    color: int
    fields: tuple[EmbedField, ...] = ()
    timestamp: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )

    def field_value(self, name: str) -> str | None:
        for f in self.fields:
            if f.name == name:
                return f.value
        return None

    def to_payload(self) -> dict[str, Any]:
        """Discord webhook body."""
        return {
            "embeds": [
                {
                    "title": self.title,
                    "description": self.description,
                    "color": self.color,
                    "fields": [f.to_dict() for f in self.fields],
                    "timestamp": self.timestamp,
                }
            ]
        }


@dataclass(frozen=True)
class ProcessedEvent:
    multisig_key: str
    event_name: str
    channel_type: ChannelType
