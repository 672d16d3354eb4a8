"""
Forge Runner - Deploys the messaging contracts with `forge script`.

Compilation and broadcasting are left to Foundry. After a successful run
the deployed addresses are read back from Foundry's broadcast log:

    broadcast/<Script>.s.sol/<chain id>/run-latest.json
"""

from __future__ import annotations

import json
import os
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from ..config import BridgeConfig
from ..errors import ToolFailedError, ToolNotFoundError

DEFAULT_SCRIPT = "script/LocalTesting.s.sol:LocalSetup"

_CREATE_TYPES = ("CREATE", "CREATE2")


@dataclass(frozen=True)
class DeployedContract:
    name: Optional[str]
    address: str
    tx_hash: Optional[str]


@dataclass
class DeployResult:
    script: str
    chain_id: Optional[int] = None
    contracts: list[DeployedContract] = field(default_factory=list)
    receipts: list[dict[str, Any]] = field(default_factory=list)
    broadcast_log: Optional[Path] = None


def forge_script_command(
    rpc_url: str,
    script: str = DEFAULT_SCRIPT,
    forge_bin: str = "forge",
) -> list[str]:
    return [forge_bin, "script", "--broadcast", "--rpc-url", rpc_url, script]


def _broadcast_logs(project_dir: Path, script: str) -> dict[Path, int]:
    """Map every run-latest.json of a script to its mtime in nanoseconds."""
    script_file = Path(script.split(":", 1)[0]).name
    base = project_dir / "broadcast" / script_file
    if not base.is_dir():
        return {}
    return {path: path.stat().st_mtime_ns for path in base.glob("*/run-latest.json")}


def find_broadcast_log(
    project_dir: Path,
    script: str,
    previous: Optional[dict[Path, int]] = None,
) -> Optional[Path]:
    """
    Locate the newest run-latest.json for a script.

    Args:
        project_dir: Foundry project root
        script: Script target, e.g. "script/LocalTesting.s.sol:LocalSetup"
        previous: Logs seen before the run (see _broadcast_logs); a log
                  listed here with an unchanged mtime is stale and skipped

    Returns:
        Path to the log, or None if forge wrote none
    """
    previous = previous or {}
    candidates = [
        path
        for path, mtime in _broadcast_logs(project_dir, script).items()
        if previous.get(path) != mtime
    ]
    if not candidates:
        return None
    return max(candidates, key=lambda p: p.stat().st_mtime)


def parse_broadcast_log(path: Path, script: str = DEFAULT_SCRIPT) -> DeployResult:
    """Extract created contracts and receipts from a broadcast log."""
    with path.open("r", encoding="utf-8") as f:
        data = json.load(f)

    chain_id = data.get("chain")
    if chain_id is None and path.parent.name.isdigit():
        chain_id = int(path.parent.name)

    contracts = [
        DeployedContract(
            name=tx.get("contractName"),
            address=tx["contractAddress"],
            tx_hash=tx.get("hash"),
        )
        for tx in data.get("transactions", [])
        if tx.get("transactionType") in _CREATE_TYPES and tx.get("contractAddress")
    ]

    return DeployResult(
        script=script,
        chain_id=chain_id,
        contracts=contracts,
        receipts=list(data.get("receipts", [])),
        broadcast_log=path,
    )


def deploy_messaging_contracts(
    config: BridgeConfig,
    project_dir: Optional[Path] = None,
    script: str = DEFAULT_SCRIPT,
    forge_bin: str = "forge",
) -> DeployResult:
    """
    Run the Foundry deployment script against the configured RPC.

    forge's output is passed through untouched so that compile, network
    and funding errors reach the user verbatim. Nothing is retried.

    Args:
        config: Loaded bridge configuration
        project_dir: Foundry project root (default: cwd)
        script: Script target passed to `forge script`
        forge_bin: forge executable

    Returns:
        DeployResult with the created contracts, if any were logged

    Raises:
        ToolNotFoundError: If forge is not installed
        ToolFailedError: If forge exits nonzero
    """
    project_dir = Path(project_dir) if project_dir is not None else Path.cwd()
    cmd = forge_script_command(config.rpc_url, script=script, forge_bin=forge_bin)

    env = dict(os.environ)
    env["ETH_RPC_URL"] = config.rpc_url
    env["ACCOUNT_PRIVATE_KEY"] = config.private_key

    before = _broadcast_logs(project_dir, script)

    try:
        proc = subprocess.run(cmd, cwd=project_dir, env=env, check=False)
    except FileNotFoundError as exc:
        raise ToolNotFoundError(f"{forge_bin} not found on PATH") from exc

    if proc.returncode != 0:
        raise ToolFailedError(
            f"forge script exited with status {proc.returncode}", proc.returncode
        )

    log_path = find_broadcast_log(project_dir, script, previous=before)
    if log_path is None:
        return DeployResult(script=script)
    return parse_broadcast_log(log_path, script=script)
