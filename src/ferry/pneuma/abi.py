"""
ABI definitions for the L1 messaging contract.

Only the two entry points ferry calls are declared; the full artifact
lives in the Foundry project that `deploy-messaging-contracts` builds.
"""

from __future__ import annotations

from typing import Any

from eth_abi import encode

from .rpc import keccak256

# sendMessage(uint256 toAddress, uint256 selector, uint256[] payload) payable
# consumeMessage(uint256 fromAddress, uint256[] payload)
MESSAGING_ABI: list[dict[str, Any]] = [
    {
        "type": "function",
        "name": "sendMessage",
        "inputs": [
            {"name": "toAddress", "type": "uint256"},
            {"name": "selector", "type": "uint256"},
            {"name": "payload", "type": "uint256[]"},
        ],
        "outputs": [],
        "stateMutability": "payable",
    },
    {
        "type": "function",
        "name": "consumeMessage",
        "inputs": [
            {"name": "fromAddress", "type": "uint256"},
            {"name": "payload", "type": "uint256[]"},
        ],
        "outputs": [],
        "stateMutability": "nonpayable",
    },
]


def find_function(abi: list, function_name: str) -> dict[str, Any]:
    for entry in abi:
        if entry.get("type") == "function" and entry.get("name") == function_name:
            return entry
    raise ValueError(f"Function {function_name} not found in ABI")


def function_signature(abi: list, function_name: str) -> str:
    """Return the canonical signature, e.g. ``consumeMessage(uint256,uint256[])``."""
    func = find_function(abi, function_name)
    input_types = [inp["type"] for inp in func.get("inputs", [])]
    return f"{function_name}({','.join(input_types)})"


def function_selector(signature: str) -> bytes:
    """First 4 bytes of keccak256 of the signature."""
    return keccak256(signature.encode("utf-8"))[:4]


def encode_call(abi: list, function_name: str, args: list) -> str:
    """
    ABI-encode a function call.

    Args:
        abi: Contract ABI
        function_name: Function name to call
        args: Function arguments

    Returns:
        0x-prefixed hex encoded calldata
    """
    func = find_function(abi, function_name)
    input_types = [inp["type"] for inp in func.get("inputs", [])]
    selector = function_selector(function_signature(abi, function_name))

    encoded_args = encode(input_types, args) if args else b""
    return "0x" + selector.hex() + encoded_args.hex()
