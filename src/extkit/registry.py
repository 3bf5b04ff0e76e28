"""
Registry Index Manager -- the read-modify-write cycle over the index key.

KNOWN RACE: the ledger offers only independent get and set. Two
``append_id`` calls that both read before either writes will each write
back their own list, and the later write wins. One of the ids is lost
from the index (its payload stays on the ledger as an orphan). This
manager does not detect or retry that case; it reports the outcome of
its own write only.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .codec import IndexCodec
from .errors import DecodeError, LedgerUnavailable
from .ledger.client import INDEX_KEY, LedgerClient

logger = logging.getLogger("extkit.registry")


@dataclass(frozen=True)
class AppendResult:
    """Outcome of a single append."""

    record_id: str
    already_present: bool
    index: tuple[str, ...]


class RegistryIndexManager:
    """Owns the index stored at ``INDEX_KEY``."""

    def __init__(self, ledger: LedgerClient):
        self.ledger = ledger

    async def _ensure_available(self) -> None:
        if not await self.ledger.is_available():
            raise LedgerUnavailable("Ledger is not available")

    async def load_index(self) -> list[str]:
        """Read and decode the index.

        Returns:
            Ordered record ids; empty when the registry is uninitialized.

        Raises:
            LedgerUnavailable: If the ledger is not ready.
        """
        await self._ensure_available()
        payload = await self.ledger.get_bytes(INDEX_KEY)
        try:
            return IndexCodec.decode(payload)
        except DecodeError as exc:
            logger.error("Error parsing index at %s: %s", INDEX_KEY, exc)
            return []

    async def append_id(self, record_id: str) -> AppendResult:
        """Append ``record_id`` to the index if absent.

        Raises:
            LedgerUnavailable: If the ledger is not ready.
            DecodeError: If the stored index is corrupt. The index is left
                untouched rather than overwritten.
            LedgerRejected: If the write back is declined.
        """
        await self._ensure_available()
        payload = await self.ledger.get_bytes(INDEX_KEY)
        ids = IndexCodec.decode(payload)

        if record_id in ids:
            logger.debug("Id %s already indexed", record_id)
            return AppendResult(record_id, True, tuple(ids))

        ids.append(record_id)
        await self.ledger.set_bytes(INDEX_KEY, IndexCodec.encode(ids))
        logger.info("Indexed %s (%d ids)", record_id, len(ids))
        return AppendResult(record_id, False, tuple(ids))
