"""
Theurgy Selector - Print the Starknet selector for a function name.
"""

from __future__ import annotations

import sys

import click

from ..errors import FerryError
from ..pneuma.messaging import resolve_selector
from .context import fail


@click.command()
@click.argument("name")
@click.option("--starkli", "use_starkli", is_flag=True, help="Compute with the starkli binary")
@click.option("--starkli-bin", envvar="STARKLI_BIN", default="starkli", help="starkli executable")
def selector(name: str, use_starkli: bool, starkli_bin: str) -> None:
    """Derive the selector for NAME."""
    try:
        value = resolve_selector(name, use_starkli=use_starkli, starkli_bin=starkli_bin)
    except ValueError as exc:
        click.secho(f"ERROR: {exc}", fg="red", err=True)
        sys.exit(1)
    except FerryError as exc:
        fail(exc)
    click.echo(hex(value))
