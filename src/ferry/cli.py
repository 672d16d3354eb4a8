"""
Ferry CLI

Command-line interface for deploying the L1 messaging contracts and
exchanging messages with a Katana L2 through them.

Configuration comes from a dotenv file (default `.env`); pass
`--profile anvil` to copy `.anvil.env` over it first.

Commands:
  deploy-messaging-contracts - Deploy the messaging contracts with forge
  send-msg                   - Send an L1 -> L2 message
  consume-msg                - Consume an L2 -> L1 message
  send-msg-usage             - Example send-msg invocation
  consume-msg-usage          - Example consume-msg invocation
  selector                   - Derive a Starknet selector
  whoami                     - Show the signing account address
  info                       - Show configuration and commands
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import click

from .config import DEFAULT_ENV_FILE, load_config
from .errors import FerryError
from .sigil.eth import get_address
from .theurgy.context import fail, require_config


# ============ Constants ============

VERSION = "0.1.0"


# ============ Banner ============


def _print_banner() -> None:
    click.echo()
    click.echo(
        click.style("  ◆ ", fg="cyan")
        + click.style("F E R R Y", fg="bright_white", bold=True)
        + click.style(f"  v{VERSION}", dim=True)
    )
    click.secho("  ─── L1 <-> L2 messaging ───", fg="cyan")
    click.echo()


# ============ Main CLI Group ============


@click.group(invoke_without_command=True)
@click.version_option(version=VERSION, prog_name="ferry")
@click.option(
    "--env-file",
    envvar="FERRY_ENV_FILE",
    default=str(DEFAULT_ENV_FILE),
    show_default=True,
    help="dotenv file with ETH_RPC_URL and ACCOUNT_PRIVATE_KEY",
)
@click.option(
    "--profile",
    envvar="FERRY_PROFILE",
    default=None,
    help="Copy .<profile>.env over the env file before loading (e.g. anvil)",
)
@click.pass_context
def cli(ctx: click.Context, env_file: str, profile: Optional[str]) -> None:
    """Ferry: messaging bridge deploy and invoke tool."""
    ctx.obj = {"env_file": env_file, "profile": profile}
    if ctx.invoked_subcommand is None:
        _print_banner()
        click.echo(ctx.get_help())


# ============ Top-level Commands ============

from .theurgy.deploy import deploy_messaging_contracts
from .theurgy.message import consume_msg, consume_msg_usage, send_msg, send_msg_usage
from .theurgy.selector import selector

cli.add_command(deploy_messaging_contracts)
cli.add_command(send_msg)
cli.add_command(send_msg_usage)
cli.add_command(consume_msg)
cli.add_command(consume_msg_usage)
cli.add_command(selector)


# ============ Identity ============


@cli.command()
@click.pass_context
def whoami(ctx: click.Context) -> None:
    """Show the signing account address."""
    config = require_config(ctx)
    try:
        click.echo(f"Address: {get_address(config.private_key)}")
    except FerryError as exc:
        fail(exc)


# ============ Info ============


@cli.command()
@click.pass_context
def info(ctx: click.Context) -> None:
    """Show configuration and available commands."""
    _print_banner()

    # ── Config ──
    click.secho("  Config ─────────────────────────────────", fg="cyan")
    click.echo()

    obj = ctx.find_root().obj or {}
    env_file = Path(obj.get("env_file", DEFAULT_ENV_FILE))
    try:
        config = load_config(env_file, profile=obj.get("profile"))
    except FerryError as exc:
        click.echo(
            click.style("  Env file:    ", dim=True)
            + click.style(str(env_file), fg="bright_white")
        )
        click.echo(
            click.style("  Status:      ", dim=True)
            + click.style(str(exc), fg="yellow")
        )
    else:
        rows = [
            ("Env file:    ", str(config.env_path)),
            ("RPC URL:     ", config.rpc_url),
            ("Messaging:   ", config.messaging_address),
            ("L2 contract: ", config.l2_contract_address),
            ("L2 account:  ", config.l2_account),
        ]
        try:
            rows.append(("Sender:      ", get_address(config.private_key)))
        except FerryError as exc:
            rows.append(("Sender:      ", f"invalid key ({exc})"))
        for label, value in rows:
            click.echo(
                click.style("  " + label, dim=True)
                + click.style(value, fg="bright_white")
            )

    click.echo()

    # ── Commands ──
    click.secho("  Commands ───────────────────────────────", fg="cyan")
    click.echo()

    commands = [
        ("deploy-messaging-contracts", "Deploy the messaging contracts"),
        ("send-msg                  ", "Send an L1 -> L2 message"),
        ("consume-msg               ", "Consume an L2 -> L1 message"),
        ("selector                  ", "Derive a Starknet selector"),
        ("whoami                    ", "Show the signing address"),
    ]
    for cmd, desc in commands:
        click.echo(
            click.style("  ", dim=True)
            + click.style(cmd, fg="bright_white", bold=True)
            + click.style("  ◇  ", fg="cyan")
            + click.style(desc, dim=True)
        )

    click.echo()


# ============ Entry Points ============


def main() -> None:
    """Ferry CLI entry point."""
    # Ensure UTF-8 output on Windows (for Unicode box-drawing / symbols)
    if sys.platform == "win32":
        try:
            sys.stdout.reconfigure(encoding="utf-8")  # type: ignore[union-attr]
            sys.stderr.reconfigure(encoding="utf-8")  # type: ignore[union-attr]
        except (AttributeError, OSError):
            pass  # Fallback: old Python or non-tty
    cli()


if __name__ == "__main__":
    main()
