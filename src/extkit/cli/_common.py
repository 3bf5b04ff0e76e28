"""Shared utilities for all CLI command modules.

Provides the Rich console, the confirmation prompts used as the owner's
approval for writes and signatures, and the catalog context that wires
config, ledger, session, orchestrator and reveal gate together.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import AsyncIterator

import click
from rich.console import Console

from .. import EXTKIT_HOME
from ..config import load_config
from ..ledger import create_ledger
from ..orchestrator import SyncOrchestrator
from ..reveal import RevealGate
from ..session import session_scope
from ..signers import GpgSigner

console = Console()

home_option = click.option(
    "--home", default=EXTKIT_HOME, type=click.Path(), help="extkit home directory."
)
yes_option = click.option(
    "--yes", "-y", "assume_yes", is_flag=True, help="Approve ledger writes and signatures."
)


def _confirm_write(key: str, data: bytes) -> bool:
    return click.confirm(f"  Authorize write of {len(data)} bytes to {key}?", default=True)


def _confirm_sign(message: str) -> bool:
    first_line = message.splitlines()[0]
    console.print(f"  [dim]Challenge: {first_line[:40]}...[/]")
    return click.confirm("  Sign the reveal challenge with your wallet key?", default=True)


def format_timestamp(ts: int) -> str:
    """Render an epoch timestamp for display."""
    return datetime.fromtimestamp(ts, tz=timezone.utc).strftime("%Y-%m-%d %H:%M UTC")


@asynccontextmanager
async def catalog_context(
    home: Path, assume_yes: bool = False
) -> AsyncIterator[tuple[SyncOrchestrator, RevealGate]]:
    """Open a session on the configured ledger for the span of one command."""
    config = load_config(home)
    ledger = create_ledger(
        config.ledger, home, authorize=None if assume_yes else _confirm_write
    )
    signer = None
    if config.signer_key:
        signer = GpgSigner(
            config.signer_key, confirm=None if assume_yes else _confirm_sign
        )
    audit_home = home if config.audit else None

    async with session_scope(
        ledger, signer=signer, wallet_address=config.wallet_address
    ) as session:
        yield (
            SyncOrchestrator(ledger, session, audit_home=audit_home),
            RevealGate(session, audit_home=audit_home),
        )
