"""
Ledger client interface.

Every operation is a coroutine and may fail on its own. Callers must not
assume any ordering between two key operations unless they await one
before issuing the other.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

INDEX_KEY = "extension_keys"
RECORD_KEY_PREFIX = "extension_"


def record_key(record_id: str) -> str:
    """Ledger key holding the payload of ``record_id``."""
    return RECORD_KEY_PREFIX + record_id


class LedgerClient(ABC):
    """Abstract authenticated key-value ledger."""

    @abstractmethod
    async def is_available(self) -> bool:
        """Check whether the ledger is ready for reads and writes."""

    @abstractmethod
    async def get_bytes(self, key: str) -> bytes:
        """Read the payload at ``key``.

        Returns:
            The stored bytes, or ``b""`` when the key is absent.

        Raises:
            LedgerUnavailable: If the ledger is not ready.
            LedgerReadError: If this one key cannot be read.
        """

    @abstractmethod
    async def set_bytes(self, key: str, data: bytes) -> None:
        """Write ``data`` at ``key``.

        Raises:
            LedgerRejected: If the write is declined or fails.
        """

    @abstractmethod
    async def self_address(self) -> str:
        """Address identifying this ledger."""

    @abstractmethod
    async def network_id(self) -> int:
        """Identifier of the network the ledger lives on."""
