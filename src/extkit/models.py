"""
Pydantic models for catalog records.

A Record is what the ledger holds. A RecordDraft is what the owner types
in before anything is sealed or written.
"""

from __future__ import annotations

import secrets
import string
import time

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_CATEGORIES = ["Payment", "DID", "Tools"]

_BASE36 = string.digits + string.ascii_lowercase


def new_record_id(now: float | None = None) -> str:
    """Generate a record id: epoch milliseconds plus a random base36 suffix.

    Args:
        now: Override for the current time, in seconds.

    Returns:
        str: An id like ``1760000000000-k3j9x0a``.
    """
    millis = int((time.time() if now is None else now) * 1000)
    suffix = "".join(secrets.choice(_BASE36) for _ in range(7))
    return f"{millis}-{suffix}"


class Record(BaseModel):
    """One catalog entry as stored on the ledger.

    Records are immutable once created; the id is carried by the ledger
    key rather than by the payload.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    category: str = ""
    description: str = ""
    encrypted_value: str
    timestamp: int = Field(description="Seconds since epoch, display ordering only")


class RecordDraft(BaseModel):
    """User-supplied fields for a new record, before sealing."""

    name: str
    category: str = "Payment"
    description: str = ""
    value: float = 0.0

    @field_validator("name", "category")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be empty")
        return v
