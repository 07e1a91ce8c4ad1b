"""Unit tests for raw JSON-RPC reads."""

import json

import pytest
import requests
import responses

from cngn_deployments.exceptions import NetworkError
from cngn_deployments.rpc import encode_short_string, get_chain_id, get_nonce, rpc_call

RPC_URL = "http://test-rpc.example.com"


class TestRpcCall:
    """Test the rpc_call function."""

    @responses.activate
    def test_returns_result(self):
        responses.add(
            responses.POST,
            RPC_URL,
            json={"jsonrpc": "2.0", "id": 1, "result": "0x1"},
            status=200,
        )

        assert rpc_call(RPC_URL, "starknet_blockNumber") == "0x1"

    @responses.activate
    def test_request_format(self):
        """Test that the request is a JSON-RPC 2.0 envelope."""

        def request_callback(request):
            body = json.loads(request.body)
            assert body["jsonrpc"] == "2.0"
            assert body["method"] == "starknet_chainId"
            assert body["params"] == []

            return (200, {}, json.dumps({"jsonrpc": "2.0", "id": body["id"], "result": "0x1"}))

        responses.add_callback(
            responses.POST,
            RPC_URL,
            callback=request_callback,
            content_type="application/json",
        )

        rpc_call(RPC_URL, "starknet_chainId")

    @responses.activate
    def test_handles_rpc_errors(self):
        responses.add(
            responses.POST,
            RPC_URL,
            json={"jsonrpc": "2.0", "id": 1, "error": {"code": 20, "message": "Contract not found"}},
            status=200,
        )

        with pytest.raises(NetworkError) as exc_info:
            rpc_call(RPC_URL, "starknet_getNonce")

        assert "Contract not found" in str(exc_info.value)

    @responses.activate
    def test_handles_http_errors(self):
        responses.add(responses.POST, RPC_URL, body="Bad gateway", status=502)

        with pytest.raises(NetworkError) as exc_info:
            rpc_call(RPC_URL, "starknet_chainId")

        assert "502" in str(exc_info.value)

    @responses.activate
    def test_handles_connection_errors(self):
        responses.add(
            responses.POST, RPC_URL, body=requests.ConnectionError("connection refused")
        )

        with pytest.raises(NetworkError):
            rpc_call(RPC_URL, "starknet_chainId")

    @responses.activate
    def test_handles_non_json_body(self):
        responses.add(responses.POST, RPC_URL, body="<html>", status=200)

        with pytest.raises(NetworkError):
            rpc_call(RPC_URL, "starknet_chainId")


class TestGetChainId:
    """Test the get_chain_id function."""

    @responses.activate
    def test_parses_short_string(self):
        responses.add(
            responses.POST,
            RPC_URL,
            json={"jsonrpc": "2.0", "id": 1, "result": "0x534e5f5345504f4c4941"},
            status=200,
        )

        assert get_chain_id(RPC_URL) == encode_short_string("SN_SEPOLIA")


class TestGetNonce:
    """Test the get_nonce function."""

    @responses.activate
    def test_returns_nonce(self):
        def request_callback(request):
            body = json.loads(request.body)
            assert body["method"] == "starknet_getNonce"
            assert body["params"] == {"block_id": "latest", "contract_address": "0x1234"}
            return (200, {}, json.dumps({"jsonrpc": "2.0", "id": 1, "result": "0x2a"}))

        responses.add_callback(responses.POST, RPC_URL, callback=request_callback)

        assert get_nonce(RPC_URL, "0x001234") == 42

    @responses.activate
    def test_unknown_account_raises(self):
        responses.add(
            responses.POST,
            RPC_URL,
            json={"jsonrpc": "2.0", "id": 1, "error": {"code": 20, "message": "Contract not found"}},
            status=200,
        )

        with pytest.raises(NetworkError):
            get_nonce(RPC_URL, "0x1234")


class TestEncodeShortString:
    def test_known_chain_ids(self):
        assert hex(encode_short_string("SN_MAIN")) == "0x534e5f4d41494e"
        assert hex(encode_short_string("SN_SEPOLIA")) == "0x534e5f5345504f4c4941"
