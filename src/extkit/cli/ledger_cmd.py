"""Ledger commands: init, check, audit."""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import click
from rich.panel import Panel
from rich.table import Table

from ..audit import read_audit_log
from ..config import ExtkitConfig, load_config, save_config
from ..ledger.models import LedgerBackendType, LedgerConfig
from ._common import catalog_context, console, format_timestamp, home_option


def register_ledger_commands(main: click.Group) -> None:
    """Register init, check and audit."""

    @main.command("init")
    @home_option
    @click.option(
        "--backend",
        type=click.Choice([b.value for b in LedgerBackendType]),
        default=LedgerBackendType.FILE.value,
        show_default=True,
    )
    @click.option("--ledger-path", default=None, type=click.Path(), help="Ledger directory.")
    @click.option("--address", default=None, help="Ledger address.")
    @click.option("--network-id", default=None, type=int, help="Network identifier.")
    @click.option("--wallet", default=None, help="Owner wallet address.")
    @click.option("--signer-key", default=None, help="GPG key id used to sign challenges.")
    def init(home, backend, ledger_path, address, network_id, wallet, signer_key):
        """Write a config and create the local ledger."""
        home_path = Path(home).expanduser()
        ledger = LedgerConfig(backend=LedgerBackendType(backend))
        if ledger_path:
            ledger.path = Path(ledger_path)
        if address:
            ledger.address = address
        if network_id is not None:
            ledger.network_id = network_id

        config = ExtkitConfig(ledger=ledger, wallet_address=wallet, signer_key=signer_key)
        config_file = save_config(home_path, config)

        if ledger.backend == LedgerBackendType.FILE:
            (ledger.path or home_path / "ledger").expanduser().mkdir(parents=True, exist_ok=True)

        console.print(f"\n  [green]Initialized[/] {config_file}")
        if not wallet or not signer_key:
            console.print("  [yellow]No wallet/signer configured: submit and reveal are disabled.[/]")
        console.print()

    @main.command("check")
    @home_option
    def check(home):
        """Check whether the ledger is available."""
        home_path = Path(home).expanduser()

        async def _run():
            async with catalog_context(home_path) as (orchestrator, _gate):
                return await orchestrator.check_availability()

        message = asyncio.run(_run())
        config = load_config(home_path)
        console.print()
        console.print(
            Panel(
                f"{message}\n"
                f"Backend: [cyan]{config.ledger.backend.value}[/]\n"
                f"Address: {config.ledger.address}\n"
                f"Network: {config.ledger.network_id}\n"
                f"Wallet: {config.wallet_address or '[yellow]not connected[/]'}",
                title="Ledger",
                border_style="cyan",
            )
        )
        if "not available" in message or message.startswith("Check failed"):
            sys.exit(1)

    @main.command("audit")
    @home_option
    @click.option("--limit", "-n", default=20, show_default=True, help="Entries to show.")
    @click.option("--record", "record_id", default=None, help="Only entries about this record id.")
    def audit(home, limit, record_id):
        """Show recent audit log entries."""
        entries = read_audit_log(Path(home).expanduser(), limit=limit, record_id=record_id)
        if not entries:
            console.print("\n  [dim]Audit log is empty.[/]\n")
            return

        table = Table(title="Audit Log", show_lines=False)
        table.add_column("Time", style="dim")
        table.add_column("Event", style="cyan", no_wrap=True)
        table.add_column("Record")
        table.add_column("Note")
        for e in entries:
            table.add_row(
                format_timestamp(e.at),
                e.event.value,
                e.record_id or "-",
                e.note,
            )
        console.print(table)
