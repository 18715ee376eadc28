"""Multisig registry built once from the MULTISIG_CONFIG JSON blob."""

from __future__ import annotations

import json
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping

from onchain_event_handler.errors import ChainDetectionError, ConfigurationError


@dataclass(frozen=True)
class MultisigIdentity:
    key: str
    address: str
    name: str
    chain: str


class MultisigRegistry:
    """Immutable address -> multisig identity lookup.

    Identities are indexed both by lowercased address and by an
    ``address:chain`` composite key, since one Safe address may be deployed
    on several chains.
    """

    def __init__(self, identities: list[MultisigIdentity]) -> None:
        by_address: dict[str, list[MultisigIdentity]] = {}
        by_chain: dict[str, MultisigIdentity] = {}
        for identity in identities:
            by_address.setdefault(identity.address, []).append(identity)
            by_chain[f"{identity.address}:{identity.chain}"] = identity

        self._by_address: Mapping[str, tuple[MultisigIdentity, ...]] = MappingProxyType(
            {addr: tuple(items) for addr, items in by_address.items()}
        )
        self._by_chain: Mapping[str, MultisigIdentity] = MappingProxyType(by_chain)
        self._identities = tuple(identities)

    @classmethod
    def from_json(cls, raw: str) -> MultisigRegistry:
        try:
            data: Any = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Failed to parse MULTISIG_CONFIG: {e}") from e
        if not isinstance(data, dict):
            raise ConfigurationError("Failed to parse MULTISIG_CONFIG: expected an object")

        identities: list[MultisigIdentity] = []
        for key, item in data.items():
            if not isinstance(item, dict):
                raise ConfigurationError(f"MULTISIG_CONFIG entry '{key}' must be an object")
            address = item.get("address")
            chain = item.get("chain")
            if not isinstance(address, str) or not address:
                raise ConfigurationError(f"MULTISIG_CONFIG entry '{key}' has no address")
            if not isinstance(chain, str) or not chain:
                raise ConfigurationError(f"MULTISIG_CONFIG entry '{key}' has no chain")
            identities.append(
                MultisigIdentity(
                    key=key,
                    address=address.lower(),
                    name=str(item.get("name") or key),
                    chain=chain.lower(),
                )
            )
        return cls(identities)

    def __len__(self) -> int:
        return len(self._identities)

    def lookup(self, address: str, chain: str | None = None) -> MultisigIdentity | None:
        """Resolve an emitting contract address to its multisig.

        Returns None for unknown addresses. Raises ChainDetectionError when the
        address is registered on several chains and no chain was given.
        """
        address = address.lower()
        if chain is not None:
            return self._by_chain.get(f"{address}:{chain.lower()}")

        candidates = self._by_address.get(address, ())
        if len(candidates) > 1:
            raise ChainDetectionError(
                f"Multisig {address} is registered on several chains "
                f"({', '.join(c.chain for c in candidates)}) and the webhook carried no network",
                address=address,
            )
        return candidates[0] if candidates else None
