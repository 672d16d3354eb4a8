"""Shared command plumbing: config loading and error reporting."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import NoReturn

import click

from ..config import BridgeConfig, load_config
from ..errors import FerryError


def fail(exc: FerryError) -> NoReturn:
    click.secho(f"ERROR: {exc}", fg="red", err=True)
    sys.exit(exc.exit_code)


def require_config(ctx: click.Context) -> BridgeConfig:
    """Load the env file chosen on the command group, exiting on failure."""
    obj = ctx.find_root().obj or {}
    try:
        return load_config(Path(obj.get("env_file", ".env")), profile=obj.get("profile"))
    except FerryError as exc:
        fail(exc)
