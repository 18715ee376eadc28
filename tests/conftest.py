"""Shared fixtures and fakes."""

from __future__ import annotations

import json

import pytest

from onchain_event_handler.chain.base import ChainReader
from onchain_event_handler.models import DecodedLogEvent
from onchain_event_handler.registry import MultisigRegistry

SAFE_ADDRESS = "0x" + "5a" * 20
ALERTS_URL = "https://discord.example/api/webhooks/1/alerts"
EVENTS_URL = "https://discord.example/api/webhooks/1/events"


class FakeChainReader(ChainReader):
    def __init__(self, sender: str | None = None, recovered: str | None = None) -> None:
        self.sender = sender
        self.recovered = recovered
        self.sender_calls: list[tuple[str, str]] = []
        self.recover_calls: list[tuple[str, int, int, int]] = []

    async def get_transaction_sender(self, chain: str, tx_hash: str) -> str | None:
        self.sender_calls.append((chain, tx_hash))
        return self.sender

    def recover_address(self, msg_hash: str, r: int, s: int, v: int) -> str | None:
        self.recover_calls.append((msg_hash, r, s, v))
        return self.recovered


def make_event(name: str, tx: str = "0xt1", address: str = SAFE_ADDRESS, **params) -> DecodedLogEvent:
    raw = {
        "address": address,
        "name": name,
        "transactionHash": tx,
        "blockHash": "0xblock1",
        "blockNumber": "100",
        "logIndex": "0",
        **params,
    }
    event = DecodedLogEvent.from_dict(raw)
    assert event is not None
    return event


@pytest.fixture
def registry():
    return MultisigRegistry.from_json(json.dumps({
        "treasury": {"address": SAFE_ADDRESS, "name": "Treasury", "chain": "celo"},
    }))


@pytest.fixture
def reader():
    return FakeChainReader()


class RecordingDispatcher:
    """Stands in for DiscordDispatcher; fails for messages about ``fail_for`` tx hashes."""

    def __init__(self, fail_for: set[str] | None = None) -> None:
        self.sent: list[tuple[str, object]] = []
        self.fail_for = fail_for or set()
        self.closed = False

    async def send(self, url, message):
        if any(tx in (message.field_value("Transaction Hash") or "") for tx in self.fail_for):
            raise RuntimeError("discord down")
        self.sent.append((url, message))

    async def close(self):
        self.closed = True
