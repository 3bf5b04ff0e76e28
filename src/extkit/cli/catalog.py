"""Catalog commands: list, stats, submit, show, reveal."""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from typing import Optional

import click
from rich.panel import Panel
from rich.table import Table

from ..catalog import catalog_stats, categories, filter_records
from ..errors import (
    ExtkitError,
    FormatError,
    LedgerUnavailable,
    RevealDenied,
    SubmitError,
)
from ..models import DEFAULT_CATEGORIES, Record, RecordDraft
from ._common import catalog_context, console, format_timestamp, home_option, yes_option


def _load(home_path: Path) -> list[Record]:
    async def _run():
        async with catalog_context(home_path) as (orchestrator, _gate):
            return await orchestrator.load_all()

    try:
        return asyncio.run(_run())
    except LedgerUnavailable as exc:
        console.print(f"[bold red]Ledger unavailable:[/] {exc}")
        sys.exit(1)


def _find(records: list[Record], record_id: str) -> Optional[Record]:
    return next((r for r in records if r.id == record_id), None)


def register_catalog_commands(main: click.Group) -> None:
    """Register the catalog commands."""

    @main.command("list")
    @home_option
    @click.option("--search", "-s", default="", help="Match name or description.")
    @click.option("--category", "-c", default=None, help="Only this category.")
    def list_records(home, search, category):
        """List catalog records, newest first."""
        records = _load(Path(home).expanduser())
        shown = filter_records(records, search=search, category=category)

        if not shown:
            console.print("\n  [dim]No extensions found.[/]")
            console.print("  Create one with [cyan]extkit submit[/cyan].\n")
            return

        table = Table(title=f"Extensions ({len(shown)} of {len(records)})")
        table.add_column("ID", style="dim")
        table.add_column("Category", style="cyan")
        table.add_column("Name", style="bold")
        table.add_column("Description")
        table.add_column("Created", style="dim")
        for r in shown:
            table.add_row(
                r.id,
                r.category,
                r.name,
                r.description or "[dim]No description provided[/]",
                format_timestamp(r.timestamp),
            )
        console.print(table)
        console.print(f"  [dim]Categories: {', '.join(categories(records))}[/]\n")

    @main.command("stats")
    @home_option
    def stats(home):
        """Show record counts per category."""
        summary = catalog_stats(_load(Path(home).expanduser()))
        lines = [f"Total Extensions: [bold]{summary['total']}[/]"]
        lines += [f"{cat}: {count}" for cat, count in summary["categories"].items()]
        console.print()
        console.print(Panel("\n".join(lines), title="Catalog", border_style="cyan"))

    @main.command("submit")
    @home_option
    @yes_option
    @click.option("--name", "-n", required=True, help="Extension name.")
    @click.option(
        "--category", "-c", default=DEFAULT_CATEGORIES[0], show_default=True,
        help=f"Category ({', '.join(DEFAULT_CATEGORIES)} or any label).",
    )
    @click.option("--description", "-d", default="", help="What the extension does.")
    @click.option("--value", type=float, default=0.0, show_default=True, help="Value to seal.")
    def submit(home, assume_yes, name, category, description, value):
        """Seal a value and store a new extension record."""
        home_path = Path(home).expanduser()
        try:
            draft = RecordDraft(name=name, category=category, description=description, value=value)
        except ValueError as exc:
            console.print(f"[bold red]Invalid extension:[/] {exc}")
            sys.exit(1)

        async def _run():
            async with catalog_context(home_path, assume_yes) as (orchestrator, _gate):
                console.print(
                    f"\n  Sealing value... [dim]{orchestrator.cipher.seal(draft.value)[:30]}...[/]"
                )
                return await orchestrator.submit(draft)

        try:
            record = asyncio.run(_run())
        except SubmitError as exc:
            console.print(f"  [bold red]{exc}[/]\n")
            sys.exit(1)

        console.print(f"  [green]Extension stored:[/] {record.id}\n")

    @main.command("show")
    @home_option
    @click.argument("record_id")
    def show(home, record_id):
        """Show one record without revealing its value."""
        record = _find(_load(Path(home).expanduser()), record_id)
        if record is None:
            console.print(f"[red]No extension with id {record_id}[/]")
            sys.exit(1)

        console.print()
        console.print(
            Panel(
                f"Category: [bold]{record.category}[/]\n"
                f"Created: {format_timestamp(record.timestamp)}\n"
                f"Description: {record.description or '[dim]No description[/]'}\n\n"
                f"Sealed: [dim]{record.encrypted_value[:100]}...[/]",
                title=record.name,
                border_style="cyan",
            )
        )

    @main.command("reveal")
    @home_option
    @yes_option
    @click.argument("record_id")
    def reveal(home, assume_yes, record_id):
        """Sign the challenge with your wallet key and reveal a value."""
        home_path = Path(home).expanduser()

        async def _run():
            async with catalog_context(home_path, assume_yes) as (orchestrator, gate):
                record = _find(await orchestrator.load_all(), record_id)
                if record is None:
                    return None, None
                value = await gate.reveal(record)
                gate.hide()
                return record, value

        try:
            record, value = asyncio.run(_run())
        except RevealDenied as exc:
            console.print(f"  [bold red]Reveal denied:[/] {exc}\n")
            sys.exit(1)
        except FormatError as exc:
            console.print(f"  [bold red]Cannot open sealed value:[/] {exc}\n")
            sys.exit(1)
        except ExtkitError as exc:
            console.print(f"  [bold red]Reveal failed:[/] {exc}\n")
            sys.exit(1)

        if record is None:
            console.print(f"[red]No extension with id {record_id}[/]")
            sys.exit(1)

        console.print()
        console.print(
            Panel(
                f"[bold]{value:g}[/]\n\n"
                "[dim]Revealed client-side after wallet verification. "
                "The placeholder cipher offers no confidentiality.[/]",
                title=f"{record.name} — revealed value",
                border_style="green",
            )
        )
