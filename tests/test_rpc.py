"""Tests for the JSON-RPC client, using httpx's mock transport."""

from __future__ import annotations

import json
import os
from typing import Callable
from unittest.mock import patch

import httpx
import pytest

from ferry.errors import ConfigError, RpcError
from ferry.pneuma import rpc

_RealClient = httpx.Client


def _mock_client(handler: Callable[[httpx.Request], httpx.Response]):
    def factory(*args, **kwargs) -> httpx.Client:
        return _RealClient(transport=httpx.MockTransport(handler))

    return patch("ferry.pneuma.rpc.httpx.Client", side_effect=factory)


class TestRpcCall:
    """Tests for _rpc_call."""

    def test_returns_result(self) -> None:
        seen: list[dict] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(json.loads(request.content))
            return httpx.Response(200, json={"jsonrpc": "2.0", "id": 1, "result": "0x7a69"})

        with _mock_client(handler):
            assert rpc.get_chain_id(rpc_url="http://node:8545") == 31337

        assert seen[0]["method"] == "eth_chainId"
        assert seen[0]["params"] == []

    def test_rpc_error_surfaces_verbatim(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200,
                json={"jsonrpc": "2.0", "id": 1, "error": {"code": -32003, "message": "Insufficient funds"}},
            )

        with _mock_client(handler):
            with pytest.raises(RpcError, match="Insufficient funds"):
                rpc.send_raw_transaction("0xdead", rpc_url="http://node:8545")

    def test_http_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(502)

        with _mock_client(handler):
            with pytest.raises(RpcError, match="eth_gasPrice"):
                rpc.get_gas_price(rpc_url="http://node:8545")

    def test_non_json_body(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>Bad Gateway</html>")

        with _mock_client(handler):
            with pytest.raises(RpcError, match="eth_chainId"):
                rpc.get_chain_id(rpc_url="http://node:8545")

    def test_non_object_body(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=[1, 2])

        with _mock_client(handler):
            with pytest.raises(RpcError, match="non-object"):
                rpc.get_gas_price(rpc_url="http://node:8545")

    def test_uses_env_rpc_url(self) -> None:
        urls: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            urls.append(str(request.url))
            return httpx.Response(200, json={"jsonrpc": "2.0", "id": 1, "result": "0x3"})

        os.environ["ETH_RPC_URL"] = "http://from-env:8545"
        with _mock_client(handler):
            assert rpc.get_nonce("0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266") == 3
        assert urls == ["http://from-env:8545"]


class TestChainId:
    """Tests for get_chain_id."""

    def test_env_override_skips_rpc(self) -> None:
        os.environ["CHAIN_ID"] = "1337"
        with patch("ferry.pneuma.rpc._rpc_call") as call:
            assert rpc.get_chain_id() == 1337
        call.assert_not_called()

    def test_hex_env_override(self) -> None:
        os.environ["CHAIN_ID"] = "0x7a69"
        with patch("ferry.pneuma.rpc._rpc_call") as call:
            assert rpc.get_chain_id() == 31337
        call.assert_not_called()

    def test_invalid_env_override(self) -> None:
        os.environ["CHAIN_ID"] = "abc"
        with patch("ferry.pneuma.rpc._rpc_call") as call:
            with pytest.raises(ConfigError, match="CHAIN_ID"):
                rpc.get_chain_id()
        call.assert_not_called()


class TestWaitForReceipt:
    """Tests for wait_for_receipt."""

    def test_polls_until_receipt(self) -> None:
        receipts = [None, None, {"status": "0x1"}]
        with patch("ferry.pneuma.rpc._rpc_call", side_effect=receipts) as call:
            with patch("ferry.pneuma.rpc.time.sleep"):
                assert rpc.wait_for_receipt("0xabc") == {"status": "0x1"}
        assert call.call_count == 3

    def test_timeout(self) -> None:
        with patch("ferry.pneuma.rpc._rpc_call", return_value=None):
            with patch("ferry.pneuma.rpc.time.sleep"):
                with pytest.raises(TimeoutError):
                    rpc.wait_for_receipt("0xabc", timeout=0)


class TestKeccak:
    def test_known_digest(self) -> None:
        assert rpc.keccak256(b"").hex() == (
            "c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470"
        )
