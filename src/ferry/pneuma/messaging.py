"""
L1 -> L2 messaging operations.

send_message:    sendMessage(L2_CONTRACT_ADDR, selector, payload), value 1 wei
consume_message: consumeMessage(L2_CONTRACT_ADDR, payload), no value

Each call submits exactly one transaction. Re-running a call submits a
new, independent transaction.
"""

from __future__ import annotations

from typing import Optional, Sequence

from ..config import BridgeConfig
from ..utils import parse_uint
from .abi import MESSAGING_ABI
from .starknet import get_selector_from_name, starkli_selector
from .tx import build_contract_tx, sign_and_send

# Fee attached to every sendMessage call, in wei.
SEND_MESSAGE_VALUE = 1


def resolve_selector(
    selector_str: str,
    use_starkli: bool = False,
    starkli_bin: str = "starkli",
) -> int:
    if use_starkli:
        return starkli_selector(selector_str, starkli_bin=starkli_bin)
    return get_selector_from_name(selector_str)


def build_send_message_tx(
    config: BridgeConfig,
    selector: int,
    payload: Sequence[int],
    value: int = SEND_MESSAGE_VALUE,
    gas_limit: Optional[int] = None,
) -> dict:
    """Build the unsigned sendMessage transaction."""
    return build_contract_tx(
        contract_address=config.messaging_address,
        function_name="sendMessage",
        args=[parse_uint(config.l2_contract_address), selector, list(payload)],
        abi=MESSAGING_ABI,
        value=value,
        gas_limit=gas_limit,
        private_key=config.private_key,
        rpc_url=config.rpc_url,
    )


def build_consume_message_tx(
    config: BridgeConfig,
    payload: Sequence[int],
    gas_limit: Optional[int] = None,
) -> dict:
    """Build the unsigned consumeMessage transaction."""
    return build_contract_tx(
        contract_address=config.messaging_address,
        function_name="consumeMessage",
        args=[parse_uint(config.l2_contract_address), list(payload)],
        abi=MESSAGING_ABI,
        value=0,
        gas_limit=gas_limit,
        private_key=config.private_key,
        rpc_url=config.rpc_url,
    )


def send_message(
    config: BridgeConfig,
    selector_str: str,
    payload: Sequence[int],
    value: int = SEND_MESSAGE_VALUE,
    use_starkli: bool = False,
    starkli_bin: str = "starkli",
    wait: bool = True,
) -> dict:
    """
    Send a message from L1 to the configured L2 contract.

    Args:
        config: Loaded bridge configuration
        selector_str: Human-readable L1 handler name on the L2 contract
        payload: Message payload
        value: Fee attached to the call in wei
        use_starkli: Derive the selector with the starkli binary
        starkli_bin: starkli executable
        wait: Whether to wait for the receipt

    Returns:
        Dict with tx_hash, selector and, if waited, receipt and status
    """
    selector = resolve_selector(
        selector_str, use_starkli=use_starkli, starkli_bin=starkli_bin
    )
    tx = build_send_message_tx(config, selector, payload, value=value)
    result = sign_and_send(
        tx, private_key=config.private_key, wait=wait, rpc_url=config.rpc_url
    )
    result["selector"] = selector
    return result


def consume_message(
    config: BridgeConfig,
    payload: Sequence[int],
    wait: bool = True,
) -> dict:
    """
    Consume a message sent from the configured L2 contract to L1.

    Returns:
        Dict with tx_hash and, if waited, receipt and status
    """
    tx = build_consume_message_tx(config, payload)
    return sign_and_send(
        tx, private_key=config.private_key, wait=wait, rpc_url=config.rpc_url
    )
