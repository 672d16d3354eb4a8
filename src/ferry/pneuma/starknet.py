"""
Starknet entry point selectors.

A selector is the Keccak-256 of the ASCII function name truncated to
250 bits (`starknet_keccak`). `starkli selector <name>` computes the same
value; `starkli_selector` shells out to it for parity checks.
"""

from __future__ import annotations

import subprocess

from ..errors import ToolFailedError, ToolNotFoundError
from ..utils import parse_uint
from .rpc import keccak256

MASK_250 = 2**250 - 1

# Entry points with a reserved selector of 0.
DEFAULT_ENTRY_POINT_NAMES = ("__default__", "__l1_default__")


def starknet_keccak(data: bytes) -> int:
    return int.from_bytes(keccak256(data), "big") & MASK_250


def get_selector_from_name(name: str) -> int:
    """
    Derive the selector for a Starknet function name.

    Raises:
        ValueError: If the name is empty or not ASCII
    """
    if not name:
        raise ValueError("Selector name must not be empty")
    if not name.isascii():
        raise ValueError(f"Selector name must be ASCII: {name!r}")
    if name in DEFAULT_ENTRY_POINT_NAMES:
        return 0
    return starknet_keccak(name.encode("ascii"))


def starkli_selector(name: str, starkli_bin: str = "starkli") -> int:
    """
    Derive the selector by running `starkli selector <name>`.

    Raises:
        ToolNotFoundError: If the starkli binary is not on PATH
        ToolFailedError: If starkli exits nonzero or prints garbage
    """
    try:
        proc = subprocess.run(
            [starkli_bin, "selector", name],
            capture_output=True,
            text=True,
            check=False,
        )
    except FileNotFoundError as exc:
        raise ToolNotFoundError(f"{starkli_bin} not found on PATH") from exc

    if proc.returncode != 0:
        raise ToolFailedError(proc.stderr.strip() or proc.stdout.strip(), proc.returncode)

    try:
        return parse_uint(proc.stdout.strip())
    except ValueError as exc:
        raise ToolFailedError(f"Unexpected starkli output: {proc.stdout!r}", 1) from exc
