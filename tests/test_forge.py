"""Tests for the forge deployment runner and broadcast log parsing."""

from __future__ import annotations

import json
import os
import subprocess
import time
from pathlib import Path
from unittest.mock import patch

import pytest

from ferry.config import BridgeConfig
from ferry.errors import ToolFailedError, ToolNotFoundError
from ferry.pneuma.forge import (
    DEFAULT_SCRIPT,
    deploy_messaging_contracts,
    find_broadcast_log,
    forge_script_command,
    parse_broadcast_log,
)

MESSAGING_ADDR = "0xe7f1725E7734CE288F8367e1Bb143E90bb3F0512"

BROADCAST_LOG = {
    "transactions": [
        {
            "hash": "0xaaa",
            "transactionType": "CREATE",
            "contractName": "StarknetMessagingLocal",
            "contractAddress": MESSAGING_ADDR,
        },
        {
            "hash": "0xbbb",
            "transactionType": "CALL",
            "contractName": None,
            "contractAddress": MESSAGING_ADDR,
        },
        {
            "hash": "0xccc",
            "transactionType": "CREATE",
            "contractName": "Contract1",
            "contractAddress": "0x9fE46736679d2D9a65F0992F2272dE9f3c7fa6e0",
        },
    ],
    "receipts": [
        {"transactionHash": "0xaaa", "status": "0x1", "contractAddress": MESSAGING_ADDR},
    ],
    "chain": 31337,
}


def _write_log(project: Path, chain_id: int = 31337, body: dict | None = None) -> Path:
    log_dir = project / "broadcast" / "LocalTesting.s.sol" / str(chain_id)
    log_dir.mkdir(parents=True, exist_ok=True)
    path = log_dir / "run-latest.json"
    path.write_text(json.dumps(body or BROADCAST_LOG), encoding="utf-8")
    return path


class TestForgeCommand:
    def test_command_shape(self) -> None:
        assert forge_script_command("http://127.0.0.1:8545") == [
            "forge",
            "script",
            "--broadcast",
            "--rpc-url",
            "http://127.0.0.1:8545",
            "script/LocalTesting.s.sol:LocalSetup",
        ]


class TestBroadcastLog:
    """Tests for locating and parsing run-latest.json."""

    def test_parse_created_contracts(self, tmp_path: Path) -> None:
        result = parse_broadcast_log(_write_log(tmp_path))
        assert result.chain_id == 31337
        assert [c.name for c in result.contracts] == ["StarknetMessagingLocal", "Contract1"]
        assert result.contracts[0].address == MESSAGING_ADDR
        assert result.contracts[0].tx_hash == "0xaaa"
        assert len(result.receipts) == 1

    def test_chain_id_from_directory(self, tmp_path: Path) -> None:
        body = {k: v for k, v in BROADCAST_LOG.items() if k != "chain"}
        result = parse_broadcast_log(_write_log(tmp_path, chain_id=1337, body=body))
        assert result.chain_id == 1337

    def test_find_missing(self, tmp_path: Path) -> None:
        assert find_broadcast_log(tmp_path, DEFAULT_SCRIPT) is None

    def test_find_newest(self, tmp_path: Path) -> None:
        old = _write_log(tmp_path, chain_id=1)
        new = _write_log(tmp_path, chain_id=31337)
        past = time.time() - 60
        os.utime(old, (past, past))
        assert find_broadcast_log(tmp_path, DEFAULT_SCRIPT) == new

    def test_unchanged_log_is_stale(self, tmp_path: Path) -> None:
        path = _write_log(tmp_path)
        previous = {path: path.stat().st_mtime_ns}
        assert find_broadcast_log(tmp_path, DEFAULT_SCRIPT, previous=previous) is None


class TestDeploy:
    """Tests for deploy_messaging_contracts."""

    def test_runs_forge_and_reports_addresses(self, config: BridgeConfig, tmp_path: Path) -> None:
        def fake_run(cmd, cwd, env, check):
            _write_log(Path(cwd))
            return subprocess.CompletedProcess(cmd, 0)

        with patch("ferry.pneuma.forge.subprocess.run", side_effect=fake_run) as run:
            result = deploy_messaging_contracts(config, project_dir=tmp_path)

        cmd = run.call_args.args[0]
        assert cmd[:3] == ["forge", "script", "--broadcast"]
        assert cmd[cmd.index("--rpc-url") + 1] == config.rpc_url
        assert run.call_args.kwargs["cwd"] == tmp_path
        assert run.call_args.kwargs["env"]["ACCOUNT_PRIVATE_KEY"] == config.private_key
        assert result.contracts[0].address == MESSAGING_ADDR

    def test_no_log_is_not_an_error(self, config: BridgeConfig, tmp_path: Path) -> None:
        completed = subprocess.CompletedProcess([], 0)
        with patch("ferry.pneuma.forge.subprocess.run", return_value=completed):
            result = deploy_messaging_contracts(config, project_dir=tmp_path)
        assert result.contracts == []
        assert result.broadcast_log is None

    def test_leftover_log_from_earlier_run_is_ignored(
        self, config: BridgeConfig, tmp_path: Path
    ) -> None:
        """forge exiting 0 without broadcasting must not report an old deployment."""
        _write_log(tmp_path)
        completed = subprocess.CompletedProcess([], 0)
        with patch("ferry.pneuma.forge.subprocess.run", return_value=completed):
            result = deploy_messaging_contracts(config, project_dir=tmp_path)
        assert result.contracts == []
        assert result.broadcast_log is None

    def test_rewritten_log_replaces_leftover(self, config: BridgeConfig, tmp_path: Path) -> None:
        path = _write_log(tmp_path)
        past = time.time() - 60
        os.utime(path, (past, past))
        body = dict(BROADCAST_LOG, transactions=BROADCAST_LOG["transactions"][2:])

        def fake_run(cmd, cwd, env, check):
            _write_log(Path(cwd), body=body)
            return subprocess.CompletedProcess(cmd, 0)

        with patch("ferry.pneuma.forge.subprocess.run", side_effect=fake_run):
            result = deploy_messaging_contracts(config, project_dir=tmp_path)
        assert [c.name for c in result.contracts] == ["Contract1"]
        assert result.broadcast_log == path

    def test_failure_propagates_exit_code(self, config: BridgeConfig, tmp_path: Path) -> None:
        completed = subprocess.CompletedProcess([], 2)
        with patch("ferry.pneuma.forge.subprocess.run", return_value=completed) as run:
            with pytest.raises(ToolFailedError) as excinfo:
                deploy_messaging_contracts(config, project_dir=tmp_path)
        assert excinfo.value.exit_code == 2
        assert run.call_count == 1

    def test_forge_missing(self, config: BridgeConfig, tmp_path: Path) -> None:
        with patch("ferry.pneuma.forge.subprocess.run", side_effect=FileNotFoundError):
            with pytest.raises(ToolNotFoundError):
                deploy_messaging_contracts(config, project_dir=tmp_path, forge_bin="forge-x")
