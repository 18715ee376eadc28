"""Shared types and helpers for per-event formatters."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Awaitable, Callable

from onchain_event_handler.chain.base import ChainReader
from onchain_event_handler.chain.networks import ChainConfig
from onchain_event_handler.models import DecodedLogEvent, EmbedField


@dataclass(frozen=True)
class FormatContext:
    chain: ChainConfig
    safe_tx_hash: str
    reader: ChainReader | None = None


EventFormatter = Callable[[DecodedLogEvent, FormatContext], Awaitable[list[EmbedField]]]


def parse_int(value: Any) -> int | None:
    """Parse a decoded uint that may arrive as int, decimal string or 0x-hex string."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        text = value.strip()
        try:
            if text.lower().startswith("0x"):
                return int(text, 16)
            return int(text)
        except ValueError:
            return None
    return None


def format_amount(amount: int, chain: ChainConfig) -> str:
    # exact; Decimal division would round to the context precision
    scaled = Decimal(f"{amount}e-{chain.decimals}")
    return f"{scaled:.6f} {chain.symbol}"


def address_link(address: str, chain: ChainConfig) -> str:
    """Shortened explorer link, e.g. ``[0x1234...abcd](https://...)``."""
    return f"[{address[:6]}...{address[-4:]}]({chain.explorer.address(address)})"


def text_field(event: DecodedLogEvent, key: str, label: str) -> list[EmbedField]:
    value = event.get_str(key)
    return [EmbedField(label, value)] if value else []
