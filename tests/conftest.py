"""Shared fixtures: isolated environment and an Anvil-style env file."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterator
from unittest.mock import patch

import pytest

from ferry.config import BridgeConfig, load_config

# First pre-funded Anvil account.
ANVIL_PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
ANVIL_RPC_URL = "http://127.0.0.1:8545"


@pytest.fixture(autouse=True)
def isolated_environ() -> Iterator[None]:
    """Undo whatever load_config exports into os.environ."""
    with patch.dict(os.environ):
        for key in ("ETH_RPC_URL", "ACCOUNT_PRIVATE_KEY", "CHAIN_ID", "C_MSG_L2_ADDR",
                    "L2_CONTRACT_ADDR", "L2_ACCOUNT", "FERRY_ENV_FILE", "FERRY_PROFILE"):
            os.environ.pop(key, None)
        yield


@pytest.fixture()
def env_file(tmp_path: Path) -> Path:
    path = tmp_path / ".env"
    path.write_text(
        f"ETH_RPC_URL={ANVIL_RPC_URL}\nACCOUNT_PRIVATE_KEY={ANVIL_PRIVATE_KEY}\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture()
def config(env_file: Path) -> BridgeConfig:
    return load_config(env_file)
