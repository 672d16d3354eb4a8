"""
Theurgy Message - Send and consume L1 <-> L2 messages.

Commands:
- send-msg:          sendMessage(L2_CONTRACT_ADDR, selector, payload), value 1 wei
- consume-msg:       consumeMessage(L2_CONTRACT_ADDR, payload)
- send-msg-usage:    print an example send-msg invocation
- consume-msg-usage: print an example consume-msg invocation
"""

from __future__ import annotations

import json
import sys

import click

from ..errors import FerryError
from ..pneuma.messaging import (
    SEND_MESSAGE_VALUE,
    build_consume_message_tx,
    build_send_message_tx,
    consume_message,
    resolve_selector,
    send_message,
)
from ..utils import parse_payload
from .context import fail, require_config

SEND_MSG_USAGE = 'ferry send-msg --selector-str func_name --payload "[1,2]"'
CONSUME_MSG_USAGE = 'ferry consume-msg --payload "[1,2]"'


def _parse_payload_or_exit(payload_str: str) -> list[int]:
    try:
        return parse_payload(payload_str)
    except ValueError as exc:
        click.secho(f"ERROR: Invalid payload: {exc}", fg="red", err=True)
        sys.exit(1)


def _print_tx(tx: dict) -> None:
    click.echo(json.dumps(tx, indent=2))


def _report(result: dict) -> None:
    if "status" not in result:
        click.secho("SUBMITTED: Transaction sent (not waiting for receipt)", fg="yellow")
        click.echo(f"  TX: {result['tx_hash']}")
        return

    if result["status"] == 1:
        click.secho("SUCCESS: Transaction confirmed!", fg="green")
        click.echo(f"  TX: {result['tx_hash']}")
    else:
        click.secho("FAILED: Transaction reverted", fg="red")
        click.echo(f"  TX: {result.get('tx_hash', 'unknown')}")
        sys.exit(1)


@click.command("send-msg")
@click.option("--selector-str", required=True, help="L1 handler name on the L2 contract")
@click.option("--payload", "payload_str", required=True, help='Payload as an array, e.g. "[1,2]"')
@click.option("--value", default=SEND_MESSAGE_VALUE, type=int, show_default=True, help="Fee in wei")
@click.option("--starkli", "use_starkli", is_flag=True, help="Derive the selector with starkli")
@click.option("--starkli-bin", envvar="STARKLI_BIN", default="starkli", help="starkli executable")
@click.option("--dry-run", is_flag=True, help="Print the unsigned transaction and exit")
@click.option("--wait/--no-wait", default=True, help="Wait for the receipt")
@click.pass_context
def send_msg(
    ctx: click.Context,
    selector_str: str,
    payload_str: str,
    value: int,
    use_starkli: bool,
    starkli_bin: str,
    dry_run: bool,
    wait: bool,
) -> None:
    """
    Send a message from L1 to the L2 contract.

    Calls sendMessage on the messaging contract with a fee attached.
    """
    config = require_config(ctx)
    payload = _parse_payload_or_exit(payload_str)

    click.echo("=== Ferry Send Message ===")
    click.echo("")
    click.echo(f"  Messaging: {config.messaging_address}")
    click.echo(f"  To (L2): {config.l2_contract_address}")
    click.echo(f"  Selector: {selector_str}")
    click.echo(f"  Payload: {payload}")
    click.echo(f"  Value: {value} wei")
    click.echo("")

    try:
        if dry_run:
            selector_value = resolve_selector(
                selector_str, use_starkli=use_starkli, starkli_bin=starkli_bin
            )
            click.echo(f"  Selector value: {hex(selector_value)}")
            _print_tx(build_send_message_tx(config, selector_value, payload, value=value))
            return

        result = send_message(
            config,
            selector_str,
            payload,
            value=value,
            use_starkli=use_starkli,
            starkli_bin=starkli_bin,
            wait=wait,
        )
    except ValueError as exc:
        click.secho(f"ERROR: {exc}", fg="red", err=True)
        sys.exit(1)
    except FerryError as exc:
        fail(exc)
    except TimeoutError as exc:
        click.secho(f"Transaction failed: {exc}", fg="red", err=True)
        sys.exit(1)

    click.echo(f"  Selector value: {hex(result['selector'])}")
    _report(result)


@click.command("consume-msg")
@click.option("--payload", "payload_str", required=True, help='Payload as an array, e.g. "[1,2]"')
@click.option("--dry-run", is_flag=True, help="Print the unsigned transaction and exit")
@click.option("--wait/--no-wait", default=True, help="Wait for the receipt")
@click.pass_context
def consume_msg(ctx: click.Context, payload_str: str, dry_run: bool, wait: bool) -> None:
    """
    Consume a message sent from the L2 contract to L1.
    """
    config = require_config(ctx)
    payload = _parse_payload_or_exit(payload_str)

    click.echo("=== Ferry Consume Message ===")
    click.echo("")
    click.echo(f"  Messaging: {config.messaging_address}")
    click.echo(f"  From (L2): {config.l2_contract_address}")
    click.echo(f"  Payload: {payload}")
    click.echo("")

    try:
        if dry_run:
            _print_tx(build_consume_message_tx(config, payload))
            return
        result = consume_message(config, payload, wait=wait)
    except ValueError as exc:
        click.secho(f"ERROR: {exc}", fg="red", err=True)
        sys.exit(1)
    except FerryError as exc:
        fail(exc)
    except TimeoutError as exc:
        click.secho(f"Transaction failed: {exc}", fg="red", err=True)
        sys.exit(1)

    _report(result)


@click.command("send-msg-usage")
def send_msg_usage() -> None:
    """Show how to call send-msg."""
    click.echo(SEND_MSG_USAGE)


@click.command("consume-msg-usage")
def consume_msg_usage() -> None:
    """Show how to call consume-msg."""
    click.echo(CONSUME_MSG_USAGE)

