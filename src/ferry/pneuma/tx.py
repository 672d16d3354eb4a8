"""
Transaction Builder - Build, sign, and send Ethereum transactions.

Uses eth-account for signing and httpx-based JSON-RPC for sending.
All gas is paid by the configured account.
"""

from __future__ import annotations

from typing import Any, Optional

from eth_utils import to_checksum_address

from ..sigil.eth import get_account
from .abi import encode_call
from .rpc import (
    estimate_gas,
    get_chain_id,
    get_gas_price,
    get_nonce,
    send_raw_transaction,
    wait_for_receipt,
)


def build_contract_tx(
    contract_address: str,
    function_name: str,
    args: list,
    abi: list,
    value: int = 0,
    gas_limit: Optional[int] = None,
    private_key: Optional[str] = None,
    rpc_url: Optional[str] = None,
) -> dict:
    """
    Build a contract call transaction (unsigned).

    Args:
        contract_address: 0x-prefixed contract address
        function_name: Function to call
        args: Function arguments
        abi: Contract ABI
        value: ETH value in wei (default: 0)
        gas_limit: Gas limit (default: eth_estimateGas)
        private_key: For nonce lookup
        rpc_url: RPC endpoint URL

    Returns:
        Unsigned transaction dict
    """
    calldata = encode_call(abi, function_name, args)

    account = get_account(private_key)

    tx: dict[str, Any] = {
        "to": to_checksum_address(contract_address),
        "data": calldata,
        "value": value,
        "nonce": get_nonce(account.address, rpc_url=rpc_url),
        "gasPrice": get_gas_price(rpc_url=rpc_url),
        "chainId": get_chain_id(rpc_url=rpc_url),
    }
    tx["gas"] = gas_limit or estimate_gas(tx, account.address, rpc_url=rpc_url)

    return tx


def sign_and_send(
    tx: dict,
    private_key: Optional[str] = None,
    wait: bool = True,
    timeout: int = 120,
    rpc_url: Optional[str] = None,
) -> dict:
    """
    Sign a transaction and send it.

    Exactly one eth_sendRawTransaction is issued; nothing is retried.

    Args:
        tx: Unsigned transaction dict
        private_key: 0x-prefixed hex private key
        wait: Whether to wait for receipt
        timeout: Receipt wait timeout
        rpc_url: RPC endpoint URL

    Returns:
        Dict with tx_hash and optionally receipt and status
    """
    account = get_account(private_key)
    signed = account.sign_transaction(tx)
    raw_tx = "0x" + signed.raw_transaction.hex().removeprefix("0x")

    tx_hash = send_raw_transaction(raw_tx, rpc_url=rpc_url)
    result: dict[str, Any] = {"tx_hash": tx_hash}

    if wait:
        receipt = wait_for_receipt(tx_hash, timeout=timeout, rpc_url=rpc_url)
        result["receipt"] = receipt
        result["status"] = int(receipt.get("status", "0x0"), 16)

    return result
