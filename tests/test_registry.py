"""Tests for the registry index manager, including the lost-update race."""

from __future__ import annotations

import asyncio

import pytest

from extkit.errors import DecodeError, LedgerRejected, LedgerUnavailable
from extkit.ledger import INDEX_KEY, MemoryLedger
from extkit.registry import RegistryIndexManager


class TestLoadIndex:
    """load_index()."""

    @pytest.mark.asyncio
    async def test_uninitialized_is_empty(self, ledger: MemoryLedger):
        assert await RegistryIndexManager(ledger).load_index() == []

    @pytest.mark.asyncio
    async def test_reads_stored_index(self, ledger: MemoryLedger):
        ledger.store[INDEX_KEY] = b'["a", "b"]'
        assert await RegistryIndexManager(ledger).load_index() == ["a", "b"]

    @pytest.mark.asyncio
    async def test_unavailable_is_distinct_from_empty(self):
        registry = RegistryIndexManager(MemoryLedger(available=False))
        with pytest.raises(LedgerUnavailable):
            await registry.load_index()

    @pytest.mark.asyncio
    async def test_corrupt_index_loads_empty(self, ledger: MemoryLedger):
        ledger.store[INDEX_KEY] = b"[\"a\""
        assert await RegistryIndexManager(ledger).load_index() == []


class TestAppendId:
    """append_id()."""

    @pytest.mark.asyncio
    async def test_append_to_empty(self, ledger: MemoryLedger):
        result = await RegistryIndexManager(ledger).append_id("x")
        assert result.already_present is False
        assert result.index == ("x",)
        assert ledger.store[INDEX_KEY] == b'["x"]'

    @pytest.mark.asyncio
    async def test_append_preserves_order(self, ledger: MemoryLedger):
        registry = RegistryIndexManager(ledger)
        for i in ("a", "b", "c"):
            await registry.append_id(i)
        assert await registry.load_index() == ["a", "b", "c"]

    @pytest.mark.asyncio
    async def test_duplicate_not_appended(self, ledger: MemoryLedger):
        registry = RegistryIndexManager(ledger)
        await registry.append_id("a")
        result = await registry.append_id("a")
        assert result.already_present is True
        assert await registry.load_index() == ["a"]

    @pytest.mark.asyncio
    async def test_corrupt_index_not_overwritten(self, ledger: MemoryLedger):
        ledger.store[INDEX_KEY] = b"[\"a\""
        with pytest.raises(DecodeError):
            await RegistryIndexManager(ledger).append_id("x")
        assert ledger.store[INDEX_KEY] == b"[\"a\""

    @pytest.mark.asyncio
    async def test_rejected_write_surfaces(self):
        ledger = MemoryLedger(authorize=lambda key, data: False)
        with pytest.raises(LedgerRejected):
            await RegistryIndexManager(ledger).append_id("x")

    @pytest.mark.asyncio
    async def test_unavailable(self):
        with pytest.raises(LedgerUnavailable):
            await RegistryIndexManager(MemoryLedger(available=False)).append_id("x")


class TestConcurrentAppend:
    """Racing appends against a store without compare-and-swap."""

    @pytest.mark.asyncio
    async def test_lost_update_is_possible(self, ledger: MemoryLedger):
        """Two appends from the same starting index can keep only one id.

        This documents the race; nothing in the manager prevents it.
        """
        registry = RegistryIndexManager(ledger)
        await asyncio.gather(registry.append_id("x"), registry.append_id("y"))

        final = await registry.load_index()
        assert set(final) <= {"x", "y"}
        assert len(final) < 2

    @pytest.mark.asyncio
    async def test_sequential_appends_keep_both(self, ledger: MemoryLedger):
        registry = RegistryIndexManager(ledger)
        await registry.append_id("x")
        await registry.append_id("y")
        assert await registry.load_index() == ["x", "y"]
