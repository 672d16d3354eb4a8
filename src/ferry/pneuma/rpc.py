"""
JSON-RPC Client for the L1 test node.

Lightweight alternative to web3.py: uses httpx for HTTP.
Supports chain id, nonce and gas queries, raw transaction submission
and receipt polling.
"""

from __future__ import annotations

import os
import time
from typing import Any, Optional

import httpx
from eth_hash.auto import keccak

from ..errors import ConfigError, RpcError
from ..utils import parse_uint

# Default RPC endpoint (local Anvil)
DEFAULT_RPC_URL = "http://127.0.0.1:8545"


def keccak256(data: bytes) -> bytes:
    """Compute Keccak-256 (NOT NIST SHA3-256)."""
    return keccak(data)


def get_rpc_url() -> str:
    """Get the RPC URL from environment or default."""
    return os.environ.get("ETH_RPC_URL", DEFAULT_RPC_URL)


def _rpc_call(method: str, params: list, rpc_url: Optional[str] = None) -> Any:
    """
    Make a JSON-RPC call.

    Args:
        method: RPC method name (e.g., "eth_chainId")
        params: RPC parameters
        rpc_url: RPC endpoint URL

    Returns:
        Result field from the RPC response

    Raises:
        RpcError: If the endpoint is unreachable or returns an error
    """
    url = rpc_url or get_rpc_url()
    payload = {
        "jsonrpc": "2.0",
        "method": method,
        "params": params,
        "id": 1,
    }

    try:
        with httpx.Client(timeout=30) as client:
            response = client.post(url, json=payload)
            response.raise_for_status()
            data = response.json()
    except (httpx.HTTPError, ValueError) as exc:
        raise RpcError(f"{method} failed against {url}: {exc}") from exc

    if not isinstance(data, dict):
        raise RpcError(f"{method} returned a non-object response: {data!r}")
    if "error" in data:
        raise RpcError(f"RPC error: {data['error']}")

    return data.get("result")


def get_chain_id(rpc_url: Optional[str] = None) -> int:
    """
    Get the chain ID.

    CHAIN_ID in the environment wins; otherwise the node is asked.
    """
    configured = os.environ.get("CHAIN_ID")
    if configured:
        try:
            return parse_uint(configured)
        except ValueError:
            raise ConfigError(f"Invalid CHAIN_ID: {configured!r}") from None
    return int(_rpc_call("eth_chainId", [], rpc_url=rpc_url), 16)


def get_nonce(address: str, rpc_url: Optional[str] = None) -> int:
    """Get the pending transaction count for an address."""
    result = _rpc_call(
        "eth_getTransactionCount", [address, "pending"], rpc_url=rpc_url
    )
    return int(result, 16)


def get_gas_price(rpc_url: Optional[str] = None) -> int:
    result = _rpc_call("eth_gasPrice", [], rpc_url=rpc_url)
    return int(result, 16)


def estimate_gas(tx: dict, sender: str, rpc_url: Optional[str] = None) -> int:
    """
    Estimate gas for a call.

    A revert during estimation is reported by the node as an RPC error
    and surfaces unchanged as RpcError.
    """
    call = {
        "from": sender,
        "to": tx["to"],
        "data": tx["data"],
        "value": hex(tx.get("value", 0)),
    }
    result = _rpc_call("eth_estimateGas", [call], rpc_url=rpc_url)
    return int(result, 16)


def send_raw_transaction(raw_tx: str, rpc_url: Optional[str] = None) -> str:
    """
    Send a signed raw transaction.

    Returns:
        Transaction hash (0x-prefixed hex)
    """
    return _rpc_call("eth_sendRawTransaction", [raw_tx], rpc_url=rpc_url)


def wait_for_receipt(
    tx_hash: str,
    timeout: int = 120,
    poll_interval: float = 1.0,
    rpc_url: Optional[str] = None,
) -> dict:
    """
    Wait for a transaction receipt.

    Args:
        tx_hash: Transaction hash
        timeout: Maximum wait time in seconds
        poll_interval: Polling interval in seconds
        rpc_url: RPC endpoint URL

    Returns:
        Transaction receipt dict

    Raises:
        TimeoutError: If receipt not found within timeout
    """
    start = time.time()
    while time.time() - start < timeout:
        receipt = _rpc_call(
            "eth_getTransactionReceipt", [tx_hash], rpc_url=rpc_url
        )
        if receipt is not None:
            return receipt
        time.sleep(poll_interval)

    raise TimeoutError(f"Transaction {tx_hash} not confirmed within {timeout}s")
