"""
extkit CLI -- the sealed catalog from the command line.

Each command group lives in its own module and is attached to the main
Click group by a register function.

Entry point: extkit.cli:main
"""

from __future__ import annotations

import logging

import click

from .. import __version__


@click.group()
@click.version_option(version=__version__, prog_name="extkit")
@click.option("--verbose", "-v", is_flag=True, help="Log debug output.")
def main(verbose):
    """extkit — sealed extension catalog on an authenticated ledger."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(name)s: %(message)s",
    )


from .catalog import register_catalog_commands
from .ledger_cmd import register_ledger_commands

register_ledger_commands(main)
register_catalog_commands(main)
