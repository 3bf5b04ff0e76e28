"""
Ledger configuration models.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel


class LedgerBackendType(str, Enum):
    """Supported ledger backends."""

    MEMORY = "memory"
    FILE = "file"


class LedgerConfig(BaseModel):
    """Configuration for the ledger connection."""

    backend: LedgerBackendType = LedgerBackendType.FILE
    path: Optional[Path] = None
    address: str = "0x0000000000000000000000000000000000000000"
    network_id: int = 11155111
