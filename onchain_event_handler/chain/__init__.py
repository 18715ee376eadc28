"""Chain configuration, reads and signature parsing."""

from onchain_event_handler.chain.base import ChainReader
from onchain_event_handler.chain.jsonrpc import JsonRpcChainReader
from onchain_event_handler.chain.networks import (
    CHAIN_CONFIGS,
    BlockExplorer,
    ChainConfig,
    QuickNodeNetwork,
    get_chain_config,
    map_network_to_chain,
    safe_ui_url,
)
from onchain_event_handler.chain.signers import extract_signers

__all__ = [
    "CHAIN_CONFIGS",
    "BlockExplorer",
    "ChainConfig",
    "ChainReader",
    "JsonRpcChainReader",
    "QuickNodeNetwork",
    "extract_signers",
    "get_chain_config",
    "map_network_to_chain",
    "safe_ui_url",
]
