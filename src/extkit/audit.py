"""
Audit trail -- which records were written, and who was allowed to look.

JSONL, one entry per line, append-only. Every entry names the record it
concerns and the wallet of the session that acted on it, so the history
of a single record can be pulled back out with ``record_history``.
Malformed lines are kept as LEGACY entries on read so a damaged log never
hides the rest.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError

AUDIT_LOG_NAME = "audit.log"


class AuditEvent(str, Enum):
    """What happened to a record."""

    SUBMIT = "CATALOG_SUBMIT"
    SUBMIT_FAILED = "CATALOG_SUBMIT_FAILED"
    REVEAL_AUTHORIZED = "REVEAL_AUTHORIZED"
    REVEAL_DENIED = "REVEAL_DENIED"
    LEGACY = "LEGACY"


class AuditEntry(BaseModel):
    """One line of the audit trail."""

    at: int = Field(
        default_factory=lambda: int(datetime.now(timezone.utc).timestamp()),
        description="Epoch seconds",
    )
    event: AuditEvent
    record_id: Optional[str] = None
    wallet: Optional[str] = None
    network_id: Optional[int] = None
    note: str = ""


def audit_event(
    home: Path,
    event: AuditEvent,
    record_id: Optional[str],
    note: str = "",
    wallet: Optional[str] = None,
    network_id: Optional[int] = None,
) -> AuditEntry:
    """Append one record event to the audit trail under ``home``."""
    home.mkdir(parents=True, exist_ok=True)
    entry = AuditEntry(
        event=event,
        record_id=record_id,
        wallet=wallet,
        network_id=network_id,
        note=note,
    )
    with (home / AUDIT_LOG_NAME).open("a", encoding="utf-8") as f:
        f.write(entry.model_dump_json(exclude_none=True) + "\n")
    return entry


def read_audit_log(
    home: Path, limit: int = 0, record_id: Optional[str] = None
) -> list[AuditEntry]:
    """Read the audit trail, oldest first.

    Args:
        home: extkit home directory.
        limit: Keep only the last ``limit`` matching entries (0 = all).
        record_id: Keep only entries about this record.
    """
    audit_log = home / AUDIT_LOG_NAME
    if not audit_log.exists():
        return []

    entries: list[AuditEntry] = []
    for line in audit_log.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line:
            continue
        try:
            entry = AuditEntry.model_validate(json.loads(line))
        except (json.JSONDecodeError, ValidationError):
            entry = AuditEntry(event=AuditEvent.LEGACY, note=line)
        if record_id is None or entry.record_id == record_id:
            entries.append(entry)

    if limit > 0:
        return entries[-limit:]
    return entries


def record_history(home: Path, record_id: str) -> dict[str, int]:
    """Count events per kind for one record, e.g. how often it was revealed."""
    counts: dict[str, int] = {}
    for entry in read_audit_log(home, record_id=record_id):
        counts[entry.event.value] = counts.get(entry.event.value, 0) + 1
    return counts
