"""
Theurgy Deploy - Deploy the L1 messaging contracts.

Flow:
1. Load the env file (the profile, if any, is copied to .env first)
2. Run `forge script --broadcast --rpc-url $ETH_RPC_URL <script>`
3. Report the created contracts from Foundry's broadcast log
"""

from __future__ import annotations

from pathlib import Path

import click

from ..errors import FerryError
from ..pneuma.forge import DEFAULT_SCRIPT, deploy_messaging_contracts as run_deploy
from .context import fail, require_config


@click.command("deploy-messaging-contracts")
@click.option(
    "--project-dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=".",
    show_default=True,
    help="Foundry project containing the deployment script",
)
@click.option("--script", default=DEFAULT_SCRIPT, show_default=True, help="forge script target")
@click.option("--forge-bin", envvar="FORGE_BIN", default="forge", help="forge executable")
@click.pass_context
def deploy_messaging_contracts(
    ctx: click.Context,
    project_dir: Path,
    script: str,
    forge_bin: str,
) -> None:
    """
    Deploy the messaging contracts with forge.

    forge output is shown as-is; its exit status becomes ours.
    """
    config = require_config(ctx)

    click.echo("=== Ferry Deploy ===")
    click.echo("")
    click.echo(f"  RPC: {config.rpc_url}")
    click.echo(f"  Script: {script}")
    click.echo("")

    try:
        result = run_deploy(config, project_dir=project_dir, script=script, forge_bin=forge_bin)
    except FerryError as exc:
        fail(exc)

    click.echo("")
    if not result.contracts:
        click.secho("Deployment finished; no contract creations found in the broadcast log.", fg="yellow")
        return

    click.secho("SUCCESS: Contracts deployed!", fg="green")
    if result.chain_id is not None:
        click.echo(f"  Chain ID: {result.chain_id}")
    for contract in result.contracts:
        click.echo(f"  {contract.name or 'contract'}: {contract.address}")
        if contract.tx_hash:
            click.echo(f"    TX: {contract.tx_hash}")
    if result.broadcast_log is not None:
        click.echo(click.style(f"  Log: {result.broadcast_log}", dim=True))
