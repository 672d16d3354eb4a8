"""
ECDSA / secp256k1 account helpers.

Wraps eth-account so the rest of the package never touches raw key
material beyond passing the configured hex string around.
"""

from __future__ import annotations

import os
from typing import Optional

from eth_account import Account
from eth_account.signers.local import LocalAccount

from ..errors import ConfigError


def load_private_key() -> str:
    """
    Read the signing key from the environment.

    Returns:
        0x-prefixed hex private key

    Raises:
        ConfigError: If ACCOUNT_PRIVATE_KEY is not set
    """
    private_key = os.environ.get("ACCOUNT_PRIVATE_KEY")
    if not private_key:
        raise ConfigError("ACCOUNT_PRIVATE_KEY not set. Load an env file first.")
    if not private_key.startswith("0x"):
        private_key = "0x" + private_key
    return private_key


def get_account(private_key: Optional[str] = None) -> LocalAccount:
    """
    Get an eth-account LocalAccount from a private key.

    Args:
        private_key: 0x-prefixed hex private key.
                     If None, read from ACCOUNT_PRIVATE_KEY.
    """
    if private_key is None:
        private_key = load_private_key()
    try:
        return Account.from_key(private_key)
    except (ValueError, TypeError) as exc:
        raise ConfigError(f"Invalid ACCOUNT_PRIVATE_KEY: {exc}") from exc


def get_address(private_key: Optional[str] = None) -> str:
    """Return the checksummed address for a private key."""
    return get_account(private_key).address
