"""JSON-RPC backed chain reader."""

from __future__ import annotations

from typing import Any

import httpx
from eth_keys import keys
from eth_keys.exceptions import BadSignature, ValidationError

from onchain_event_handler.chain.base import ChainReader
from onchain_event_handler.chain.networks import CHAIN_CONFIGS
from onchain_event_handler.utils.logging import get_logger

log = get_logger(__name__)

RPC_TIMEOUT_SECONDS = 10.0


class JsonRpcChainReader(ChainReader):
    """Reads transactions over plain Ethereum JSON-RPC and recovers ECDSA signers."""

    def __init__(
        self,
        rpc_endpoints: dict[str, str] | None = None,
        supported_chains: list[str] | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._endpoints = {name: cfg.rpc_endpoint for name, cfg in CHAIN_CONFIGS.items()}
        for chain, url in (rpc_endpoints or {}).items():
            self._endpoints[chain.lower()] = url
        self._supported = set(supported_chains) if supported_chains else None
        self._client = client or httpx.AsyncClient(timeout=RPC_TIMEOUT_SECONDS)
        self._request_id = 0

    def is_supported(self, chain: str) -> bool:
        chain = chain.lower()
        if self._supported is not None and chain not in self._supported:
            return False
        return chain in self._endpoints

    async def get_transaction_sender(self, chain: str, tx_hash: str) -> str | None:
        if not self.is_supported(chain):
            log.debug("chain_read_unsupported", chain=chain)
            return None

        try:
            result = await self._call(chain, "eth_getTransactionByHash", [tx_hash])
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
            log.warning(
                "transaction_sender_lookup_failed",
                chain=chain,
                transaction_hash=tx_hash,
                error=str(e),
            )
            return None

        if not isinstance(result, dict) or not isinstance(result.get("from"), str):
            log.warning("transaction_not_found", chain=chain, transaction_hash=tx_hash)
            return None
        return result["from"].lower()

    def recover_address(self, msg_hash: str, r: int, s: int, v: int) -> str | None:
        try:
            digest = bytes.fromhex(msg_hash.removeprefix("0x"))
            signature = keys.Signature(vrs=(v, r, s))
            public_key = signature.recover_public_key_from_msg_hash(digest)
        except (BadSignature, ValidationError, ValueError) as e:
            log.warning("signature_recovery_failed", msg_hash=msg_hash, error=str(e))
            return None
        return public_key.to_checksum_address().lower()

    async def close(self) -> None:
        await self._client.aclose()

    async def _call(self, chain: str, method: str, params: list[Any]) -> Any:
        self._request_id += 1
        resp = await self._client.post(
            self._endpoints[chain.lower()],
            json={
                "jsonrpc": "2.0",
                "id": self._request_id,
                "method": method,
                "params": params,
            },
        )
        resp.raise_for_status()
        data = resp.json()
        if not isinstance(data, dict):
            raise ValueError("Malformed RPC response")
        if data.get("error"):
            raise ValueError(f"RPC error: {data['error']}")
        return data.get("result")
