"""Per-chain configuration: explorers, native tokens, RPC and Safe UI prefixes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class QuickNodeNetwork(str, Enum):
    CELO_MAINNET = "celo-mainnet"
    ETHEREUM_MAINNET = "ethereum-mainnet"


_NETWORK_TO_CHAIN = {
    QuickNodeNetwork.CELO_MAINNET.value: "celo",
    QuickNodeNetwork.ETHEREUM_MAINNET.value: "ethereum",
}


def map_network_to_chain(network: str) -> str | None:
    """Map a QuickNode network identifier (e.g. 'celo-mainnet') to a chain name."""
    return _NETWORK_TO_CHAIN.get(network.strip().lower())


@dataclass(frozen=True)
class BlockExplorer:
    base_url: str

    def tx(self, tx_hash: str) -> str:
        return f"{self.base_url}/tx/{tx_hash}"

    def block(self, number: str) -> str:
        return f"{self.base_url}/block/{number}"

    def address(self, addr: str) -> str:
        return f"{self.base_url}/address/{addr}"


@dataclass(frozen=True)
class ChainConfig:
    name: str
    explorer: BlockExplorer
    symbol: str
    decimals: int
    rpc_endpoint: str
    safe_prefix: str

    @property
    def display_name(self) -> str:
        return self.name[:1].upper() + self.name[1:]


DEFAULT_TOKEN_DECIMALS = 18

CHAIN_CONFIGS: dict[str, ChainConfig] = {
    "celo": ChainConfig(
        name="celo",
        explorer=BlockExplorer("https://celoscan.io"),
        symbol="CELO",
        decimals=DEFAULT_TOKEN_DECIMALS,
        rpc_endpoint="https://forno.celo.org",
        safe_prefix="celo",
    ),
    "ethereum": ChainConfig(
        name="ethereum",
        explorer=BlockExplorer("https://etherscan.io"),
        symbol="ETH",
        decimals=DEFAULT_TOKEN_DECIMALS,
        rpc_endpoint="https://eth.llamarpc.com",
        safe_prefix="eth",
    ),
}


def get_chain_config(chain: str) -> ChainConfig | None:
    return CHAIN_CONFIGS.get(chain.lower())


def safe_ui_url(chain: ChainConfig, safe_address: str, safe_tx_hash: str) -> str:
    """Deep link into the Safe web UI for one multisig transaction."""
    addr = safe_address.lower()
    return (
        "https://app.safe.global/transactions/tx"
        f"?safe={chain.safe_prefix}:{addr}&id=multisig_{addr}_{safe_tx_hash}"
    )
