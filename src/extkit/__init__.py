"""
extkit — sealed extension catalog on an authenticated ledger.

Records live on the ledger, one payload per key, tied together by an
append-only index. Values are sealed before they leave the session and
are revealed only after the owner signs a challenge.

The bundled cipher is a reversible placeholder. It keeps the wire format
honest, it does not keep secrets.
"""

import os

__version__ = "0.1.0"

EXTKIT_HOME = os.environ.get("EXTKIT_HOME", "~/.extkit")
