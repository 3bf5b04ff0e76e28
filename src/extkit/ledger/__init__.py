"""
Ledger access -- the only durable store the catalog has.

The ledger is an external authenticated key-value store. extkit only
consumes its interface: get and set byte payloads by key, report
availability, and name itself and its network.
"""

from .backends import FileLedger, MemoryLedger, create_ledger
from .client import INDEX_KEY, LedgerClient, record_key

__all__ = [
    "FileLedger",
    "INDEX_KEY",
    "LedgerClient",
    "MemoryLedger",
    "create_ledger",
    "record_key",
]
