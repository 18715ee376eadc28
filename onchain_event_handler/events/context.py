"""Batch-scoped lookup tables built before any event is dispatched."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from onchain_event_handler.events.catalog import SafeEvent
from onchain_event_handler.models import DecodedLogEvent


@dataclass(frozen=True)
class EventContext:
    # on-chain tx hash (lowercased) -> Safe transaction hash
    tx_hash_map: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    # on-chain tx hashes (lowercased) that carry a SafeMultiSigTransaction
    coalesced_txs: frozenset[str] = frozenset()

    def safe_tx_hash_for(self, transaction_hash: str) -> str | None:
        return self.tx_hash_map.get(transaction_hash.lower())

    def is_coalesced(self, transaction_hash: str) -> bool:
        return transaction_hash.lower() in self.coalesced_txs


def build_event_context(events: Iterable[DecodedLogEvent]) -> EventContext:
    """Single pass over the batch.

    ExecutionSuccess events with a Safe ``txHash`` populate the hash map;
    SafeMultiSigTransaction events mark their on-chain hash as coalesced so the
    terser ExecutionSuccess for the same transaction can be suppressed.
    """
    tx_hash_map: dict[str, str] = {}
    coalesced: set[str] = set()

    for event in events:
        if event.name == SafeEvent.EXECUTION_SUCCESS.value:
            safe_tx_hash = event.get_str("txHash")
            if safe_tx_hash:
                tx_hash_map[event.transaction_hash.lower()] = safe_tx_hash
        elif event.name == SafeEvent.SAFE_MULTISIG_TRANSACTION.value:
            coalesced.add(event.transaction_hash.lower())

    return EventContext(
        tx_hash_map=MappingProxyType(tx_hash_map),
        coalesced_txs=frozenset(coalesced),
    )
