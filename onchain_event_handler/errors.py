"""Exception types raised across the handler."""

from __future__ import annotations


class OnchainEventError(Exception):
    """Base class for handler errors."""


class ConfigurationError(OnchainEventError):
    """Raised when required configuration is missing or malformed."""


class ChainDetectionError(OnchainEventError):
    """Raised when the chain for an event's multisig cannot be resolved.

    Carries the identifying coordinates of the offending log so the HTTP
    layer can report them back as a 422.
    """

    def __init__(
        self,
        message: str,
        address: str = "",
        block_hash: str = "",
        transaction_hash: str = "",
    ) -> None:
        super().__init__(message)
        self.address = address
        self.block_hash = block_hash
        self.transaction_hash = transaction_hash

    def details(self) -> dict[str, str]:
        return {
            "address": self.address,
            "blockHash": self.block_hash,
            "transactionHash": self.transaction_hash,
        }
