"""
Sync Orchestrator -- loads the whole catalog and submits new records.

    load_all  ->  index -> fetch every payload -> decode -> sort newest first
    submit    ->  seal -> encode -> write payload -> append id -> reload

The record list held here is a disposable cache of the ledger. Every
successful load replaces it.

Submission is two ledger writes with no rollback. If the payload write
lands and the append is rejected or raced away, the payload becomes an
orphan. Both writes sit behind ``_store_record`` so a reconcile pass can
be added later without touching callers.
"""

from __future__ import annotations

import asyncio
import logging
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from .audit import AuditEvent, audit_event
from .cipher import CipherAdapter, PlaceholderCipher
from .codec import RecordCodec
from .errors import (
    DecodeError,
    ExtkitError,
    LedgerRejected,
    LedgerUnavailable,
    SubmitError,
)
from .ledger.client import LedgerClient, record_key
from .models import Record, RecordDraft, new_record_id
from .registry import RegistryIndexManager
from .session import Session

logger = logging.getLogger("extkit.orchestrator")


class SyncOrchestrator:
    """Composes registry, codecs and cipher for one session.

    At most one ``submit`` runs at a time per orchestrator. That keeps a
    session from racing its own index appends; other sessions can still
    race it.
    """

    def __init__(
        self,
        ledger: LedgerClient,
        session: Session,
        cipher: Optional[CipherAdapter] = None,
        audit_home: Optional[Path] = None,
    ):
        self.ledger = ledger
        self.session = session
        self.cipher = cipher or PlaceholderCipher()
        self.registry = RegistryIndexManager(ledger)
        self.audit_home = audit_home
        self.records: list[Record] = []
        self.last_load: Optional[datetime] = None
        self.submit_count = 0
        self._submit_lock = asyncio.Lock()

    async def _fetch(self, record_id: str) -> Optional[Record]:
        try:
            payload = await self.ledger.get_bytes(record_key(record_id))
        except LedgerUnavailable:
            raise
        except ExtkitError as exc:
            logger.warning("Error loading record %s: %s", record_id, exc)
            return None
        if not payload:
            logger.warning("Indexed record %s has no payload", record_id)
            return None
        try:
            return RecordCodec.decode(record_id, payload)
        except DecodeError as exc:
            logger.warning("Error parsing record %s: %s", record_id, exc)
            return None

    async def load_all(self) -> list[Record]:
        """Load every indexed record, newest first.

        Bad, unreadable or missing payloads are dropped one by one; they
        never abort the load. Equal timestamps keep their index order.

        Raises:
            LedgerUnavailable: If the ledger is not ready, or stops being
                ready while payloads are fetched. The cache is left as it was.
        """
        ids = await self.registry.load_index()
        fetched = await asyncio.gather(*(self._fetch(i) for i in ids))
        records = [r for r in fetched if r is not None]
        records.sort(key=lambda r: r.timestamp, reverse=True)

        self.records = records
        self.last_load = datetime.now(timezone.utc)
        logger.info("Loaded %d of %d indexed records", len(records), len(ids))
        return records

    async def submit(self, draft: RecordDraft | dict) -> Record:
        """Seal, store and index one new record.

        Raises:
            SubmitError: With a human-readable cause on any failure.
        """
        if not self.session.is_connected:
            raise SubmitError("Please connect wallet first")
        if isinstance(draft, dict):
            try:
                draft = RecordDraft(**draft)
            except ValidationError as exc:
                raise SubmitError(f"Submission failed: invalid draft ({exc.error_count()} error(s))") from exc

        async with self._submit_lock:
            record = Record(
                id=new_record_id(),
                name=draft.name,
                category=draft.category,
                description=draft.description,
                encrypted_value=self.cipher.seal(draft.value),
                timestamp=int(time.time()),
            )
            try:
                await self._store_record(record)
            except LedgerRejected as exc:
                self._audit(AuditEvent.SUBMIT_FAILED, record, str(exc))
                raise SubmitError(str(exc)) from exc
            except ExtkitError as exc:
                self._audit(AuditEvent.SUBMIT_FAILED, record, str(exc))
                raise SubmitError(f"Submission failed: {exc}") from exc

            self.submit_count += 1
            self._audit(AuditEvent.SUBMIT, record, record.category)

        try:
            await self.load_all()
        except LedgerUnavailable as exc:
            logger.warning("Reload after submit skipped: %s", exc)
        return record

    async def _store_record(self, record: Record) -> None:
        """Write the payload, then index it. No rollback between the two."""
        if not await self.ledger.is_available():
            raise LedgerUnavailable("Ledger is not available")
        await self.ledger.set_bytes(record_key(record.id), RecordCodec.encode(record))
        logger.debug("Payload written for %s", record.id)
        await self.registry.append_id(record.id)

    async def check_availability(self) -> str:
        """Human-readable ledger availability message."""
        try:
            available = await self.ledger.is_available()
        except ExtkitError as exc:
            return f"Check failed: {exc}"
        if available:
            return "Ledger is available and ready for sealed operations"
        return "Ledger is not available"

    def _audit(self, event: AuditEvent, record: Record, note: str = "") -> None:
        if self.audit_home is not None:
            audit_event(
                self.audit_home,
                event,
                record.id,
                note,
                wallet=self.session.wallet_address,
                network_id=self.session.network_id,
            )
