"""
Config Loader - Reads bridge settings from a dotenv file.

Foundry only reads `.env` from the project directory, so profiles such as
`.anvil.env` are copied over `.env` before loading. Every key of the file
is exported into the process environment (simple overwrite) so that child
processes like `forge script` see the same values.

Required keys: ETH_RPC_URL, ACCOUNT_PRIVATE_KEY.
"""

from __future__ import annotations

import os
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import dotenv_values
from eth_utils import is_hex_address

from .errors import ConfigError
from .utils import parse_uint

DEFAULT_ENV_FILE = Path(".env")
DEFAULT_PROFILE = "anvil"

REQUIRED_KEYS = ("ETH_RPC_URL", "ACCOUNT_PRIVATE_KEY")

# ---- Fixed addresses of the local Anvil / Katana test deployment ----
# Overridable from the env file when targeting another deployment.
_DEFAULTS: dict[str, str] = {
    "C_MSG_L2_ADDR": "0xe7f1725E7734CE288F8367e1Bb143E90bb3F0512",
    "L2_ACCOUNT": "0x6162896d1d7ab204c7ccac6dd5f8e9e7c25ecd5ae4fcb4ad32e57786bb46e03",
    "L2_CONTRACT_ADDR": "0x609f8e7a76b6cc36f3ff86f09f6e5fdd0e6320f117d817e4344c1bf9fac7d67",
}


@dataclass(frozen=True)
class BridgeConfig:
    rpc_url: str
    private_key: str
    messaging_address: str
    l2_contract_address: str
    l2_account: str
    env_path: Path


def profile_path(env_path: Path, profile: str) -> Path:
    """Return the `.<profile>.env` file that sits next to `env_path`."""
    return env_path.parent / f".{profile}.env"


def apply_profile(env_path: Path, profile: str) -> Path:
    """
    Copy a profile file over the env file.

    Args:
        env_path: Destination env file (usually `.env`)
        profile: Profile name, e.g. "anvil" for `.anvil.env`

    Returns:
        Path to the env file that was written

    Raises:
        ConfigError: If the profile file does not exist
    """
    source = profile_path(env_path, profile)
    if not source.is_file():
        raise ConfigError(f"Profile '{profile}' not found: {source}")
    shutil.copyfile(source, env_path)
    return env_path


def load_config(
    env_path: Optional[Path] = None,
    profile: Optional[str] = None,
) -> BridgeConfig:
    """
    Load the bridge configuration and export it into os.environ.

    Args:
        env_path: Path to the env file (default: ./.env)
        profile: Optional profile copied over env_path before loading

    Returns:
        Immutable BridgeConfig

    Raises:
        ConfigError: If the file is missing or a required key is absent
    """
    env_path = Path(env_path) if env_path is not None else DEFAULT_ENV_FILE

    if profile:
        apply_profile(env_path, profile)

    if not env_path.is_file():
        raise ConfigError(
            f"Config file not found: {env_path}. "
            f"Copy .{DEFAULT_PROFILE}.env to {env_path.name} or pass --profile."
        )

    values = {k: v for k, v in dotenv_values(env_path).items() if v is not None}

    missing = [key for key in REQUIRED_KEYS if not values.get(key)]
    if missing:
        raise ConfigError(
            f"Missing required key(s) in {env_path}: {', '.join(missing)}"
        )

    private_key = values["ACCOUNT_PRIVATE_KEY"]
    if not private_key.startswith("0x"):
        private_key = "0x" + private_key

    def _get(key: str) -> str:
        return values.get(key) or _DEFAULTS[key]

    messaging_address = _get("C_MSG_L2_ADDR")
    if not is_hex_address(messaging_address):
        raise ConfigError(
            f"C_MSG_L2_ADDR in {env_path} is not an L1 address: {messaging_address!r}"
        )

    for key in ("L2_CONTRACT_ADDR", "L2_ACCOUNT"):
        try:
            parse_uint(_get(key))
        except ValueError:
            raise ConfigError(
                f"{key} in {env_path} is not an L2 address: {_get(key)!r}"
            ) from None

    os.environ.update(values)

    return BridgeConfig(
        rpc_url=values["ETH_RPC_URL"],
        private_key=private_key,
        messaging_address=messaging_address,
        l2_contract_address=_get("L2_CONTRACT_ADDR"),
        l2_account=_get("L2_ACCOUNT"),
        env_path=env_path,
    )
