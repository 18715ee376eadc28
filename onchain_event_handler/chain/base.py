"""Chain reader abstract base class."""

from __future__ import annotations

from abc import ABC, abstractmethod


class ChainReader(ABC):
    """Best-effort chain reads used to enrich notifications.

    Every method returns None instead of raising when the answer cannot be
    obtained; callers must handle the absent case.
    """

    @abstractmethod
    async def get_transaction_sender(self, chain: str, tx_hash: str) -> str | None: ...

    @abstractmethod
    def recover_address(self, msg_hash: str, r: int, s: int, v: int) -> str | None:
        """Recover the signer of a raw 32-byte hash; ``v`` is the 0/1 recovery id."""

    async def close(self) -> None:
        """Clean up resources. Override if needed."""
