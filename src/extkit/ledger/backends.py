"""
Ledger backends -- where the payloads actually live.

Memory: in-process dict. For tests and for demonstrating write races.
File: one file per key in a directory. For a local ledger, a USB
drive or a mounted share.

Neither backend offers compare-and-swap. Two writers that read, modify
and write the same key can overwrite each other.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Callable, Optional

from ..errors import LedgerReadError, LedgerRejected, LedgerUnavailable
from .client import LedgerClient
from .models import LedgerBackendType, LedgerConfig

logger = logging.getLogger("extkit.ledger.backends")

WriteAuthorizer = Callable[[str, bytes], bool]

REJECTED_MESSAGE = "Transaction rejected by user"


class MemoryLedger(LedgerClient):
    """In-memory ledger.

    Every call yields to the event loop before touching the store, so
    concurrent callers interleave the way they would against a remote
    ledger.
    """

    def __init__(
        self,
        address: str = "0x0000000000000000000000000000000000000000",
        network_id: int = 31337,
        available: bool = True,
        latency: float = 0.0,
        authorize: Optional[WriteAuthorizer] = None,
    ):
        self.address = address
        self.network = network_id
        self.available = available
        self.latency = latency
        self.authorize = authorize
        self.store: dict[str, bytes] = {}

    async def _tick(self) -> None:
        await asyncio.sleep(self.latency)

    async def is_available(self) -> bool:
        await self._tick()
        return self.available

    async def get_bytes(self, key: str) -> bytes:
        await self._tick()
        if not self.available:
            raise LedgerUnavailable("Memory ledger is offline")
        return self.store.get(key, b"")

    async def set_bytes(self, key: str, data: bytes) -> None:
        await self._tick()
        if not self.available:
            raise LedgerUnavailable("Memory ledger is offline")
        if self.authorize is not None and not self.authorize(key, data):
            raise LedgerRejected(REJECTED_MESSAGE)
        self.store[key] = bytes(data)
        logger.debug("Stored %d bytes at %s", len(data), key)

    async def self_address(self) -> str:
        return self.address

    async def network_id(self) -> int:
        return self.network


class FileLedger(LedgerClient):
    """Directory-backed ledger, one file per key.

    Keys are hex-encoded into file names so any key string is safe on
    disk. The ledger counts as available while its directory exists.
    """

    def __init__(
        self,
        root: Path,
        address: str,
        network_id: int,
        authorize: Optional[WriteAuthorizer] = None,
    ):
        self.root = root.expanduser()
        self.address = address
        self.network = network_id
        self.authorize = authorize

    def _path_for(self, key: str) -> Path:
        return self.root / (key.encode("utf-8").hex() + ".bin")

    def _read(self, key: str) -> bytes:
        path = self._path_for(key)
        if not path.exists():
            return b""
        return path.read_bytes()

    def _write(self, key: str, data: bytes) -> None:
        self._path_for(key).write_bytes(data)

    async def is_available(self) -> bool:
        return self.root.is_dir()

    async def get_bytes(self, key: str) -> bytes:
        if not self.root.is_dir():
            raise LedgerUnavailable(f"Ledger directory missing: {self.root}")
        try:
            return await asyncio.to_thread(self._read, key)
        except OSError as exc:
            logger.error("Ledger read failed for %s: %s", key, exc)
            raise LedgerReadError(f"Read failed: {exc}") from exc

    async def set_bytes(self, key: str, data: bytes) -> None:
        if not self.root.is_dir():
            raise LedgerUnavailable(f"Ledger directory missing: {self.root}")
        if self.authorize is not None and not self.authorize(key, data):
            raise LedgerRejected(REJECTED_MESSAGE)
        try:
            await asyncio.to_thread(self._write, key, data)
        except OSError as exc:
            logger.error("Ledger write failed for %s: %s", key, exc)
            raise LedgerRejected(f"Write failed: {exc}") from exc
        logger.debug("Stored %d bytes at %s", len(data), key)

    async def self_address(self) -> str:
        return self.address

    async def network_id(self) -> int:
        return self.network


def create_ledger(
    config: LedgerConfig,
    home: Path,
    authorize: Optional[WriteAuthorizer] = None,
) -> LedgerClient:
    """Factory function to create the configured ledger backend.

    Args:
        config: Ledger configuration.
        home: extkit home directory, used when no path is configured.
        authorize: Optional callback approving each write.

    Returns:
        Instantiated LedgerClient.

    Raises:
        ValueError: If the backend type is not supported.
    """
    if config.backend == LedgerBackendType.MEMORY:
        return MemoryLedger(
            address=config.address,
            network_id=config.network_id,
            authorize=authorize,
        )
    if config.backend == LedgerBackendType.FILE:
        root = config.path or (home / "ledger")
        return FileLedger(
            root,
            address=config.address,
            network_id=config.network_id,
            authorize=authorize,
        )
    raise ValueError(f"Unsupported ledger backend: {config.backend}")
