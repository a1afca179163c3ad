"""Tests for the createWallet action."""

import asyncio
import json

import httpx
import pytest

from conftest import CREDENTIALS, FailingMemory, StubProvider
from privy_wallet_actions.actions.create_wallet import create_wallet
from privy_wallet_actions.errors import ActionError, ErrorKind


def _run(runtime, request):
    return asyncio.run(create_wallet.handler(runtime, request))


class TestCreateWalletSuccess:
    def test_returns_remote_address_and_network(self, make_runtime):
        provider = StubProvider(json_body={"address": "0xabc", "network": "ethereum"})
        result = _run(make_runtime(provider), {"network": "ethereum", "credentials": CREDENTIALS})
        assert result.to_wire() == {"address": "0xabc", "network": "ethereum"}

    def test_network_comes_from_response(self, make_runtime):
        provider = StubProvider(json_body={"address": "0xabc", "network": "base"})
        result = _run(make_runtime(provider), {"network": "ethereum", "credentials": CREDENTIALS})
        assert result.network == "base"

    def test_emits_exactly_one_creation_entry(self, make_runtime, memory):
        provider = StubProvider(json_body={"address": "0xabc", "network": "ethereum"})
        _run(make_runtime(provider), {"network": "ethereum", "credentials": CREDENTIALS})

        records = memory.records()
        assert len(records) == 1
        record = records[0]
        assert record.type == "blockchain_transaction"
        content = json.loads(record.content)
        assert content["type"] == "WALLET_CREATION"
        assert content["address"] == "0xabc"
        assert content["network"] == "ethereum"
        assert content["timestamp"].endswith("Z")
        assert record.metadata["address"] == "0xabc"
        assert "hash" not in record.metadata

    def test_request_shape(self, make_runtime):
        provider = StubProvider(json_body={"address": "0xabc", "network": "ethereum"})
        _run(make_runtime(provider), {"network": "ethereum", "credentials": CREDENTIALS})

        req = provider.last_request
        assert req.method == "POST"
        assert req.url.host == "auth.privy.io"
        assert req.url.path == "/api/v1/server_wallets"
        assert req.headers["authorization"] == "Bearer s"
        assert req.headers["x-app-id"] == "a"
        assert provider.last_body() == {"network": "ethereum"}

    def test_metadata_forwarded_and_logged(self, make_runtime, memory):
        provider = StubProvider(json_body={"address": "0xabc", "network": "polygon"})
        metadata = {"customId": "ops-1", "tags": ["treasury"], "description": "ops float"}
        _run(
            make_runtime(provider),
            {"network": "polygon", "metadata": metadata, "credentials": CREDENTIALS},
        )

        assert provider.last_body() == {"network": "polygon", "metadata": metadata}
        record = memory.records()[0]
        assert record.metadata["metadata"] == metadata
        assert json.loads(record.content)["metadata"] == metadata

    def test_accepts_snake_case_fields(self, make_runtime):
        provider = StubProvider(json_body={"address": "0xabc", "network": "ethereum"})
        result = _run(
            make_runtime(provider),
            {"network": "ethereum", "credentials": {"app_id": "a", "secret": "s"}},
        )
        assert result.address == "0xabc"


class TestCreateWalletValidation:
    @pytest.mark.parametrize(
        "credentials",
        [None, {}, {"appId": "a"}, {"secret": "s"}, {"appId": "", "secret": "s"}, {"appId": "a", "secret": "  "}],
    )
    def test_missing_credentials_rejected_before_network(self, make_runtime, memory, credentials):
        provider = StubProvider(json_body={"address": "0xabc", "network": "ethereum"})
        with pytest.raises(ActionError) as exc:
            _run(make_runtime(provider), {"network": "ethereum", "credentials": credentials})
        assert exc.value.kind == ErrorKind.VALIDATION
        assert exc.value.message == "Missing required credentials"
        assert provider.requests == []
        assert memory.records() == []

    def test_empty_network_rejected(self, make_runtime):
        provider = StubProvider()
        with pytest.raises(ActionError) as exc:
            _run(make_runtime(provider), {"network": "", "credentials": CREDENTIALS})
        assert exc.value.kind == ErrorKind.VALIDATION
        assert "network" in exc.value.message
        assert provider.requests == []


class TestCreateWalletErrors:
    def test_remote_message_is_surfaced(self, make_runtime, memory):
        provider = StubProvider(status_code=400, json_body={"message": "Unsupported network"})
        with pytest.raises(ActionError) as exc:
            _run(make_runtime(provider), {"network": "dogechain", "credentials": CREDENTIALS})
        assert exc.value.kind == ErrorKind.REMOTE
        assert exc.value.message == "Failed to create wallet: Unsupported network"
        assert exc.value.status_code == 400
        assert memory.records() == []

    def test_remote_error_without_message_uses_http_error(self, make_runtime):
        provider = StubProvider(status_code=500, text="upstream exploded")
        with pytest.raises(ActionError) as exc:
            _run(make_runtime(provider), {"network": "ethereum", "credentials": CREDENTIALS})
        assert exc.value.kind == ErrorKind.REMOTE
        assert exc.value.message.startswith("Failed to create wallet: ")
        assert "500" in exc.value.message

    def test_transport_error(self, make_runtime):
        provider = StubProvider(
            error=lambda request: httpx.ConnectError("connection refused", request=request)
        )
        with pytest.raises(ActionError) as exc:
            _run(make_runtime(provider), {"network": "ethereum", "credentials": CREDENTIALS})
        assert exc.value.kind == ErrorKind.TRANSPORT
        assert exc.value.message == "Failed to create wallet: connection refused"

    def test_incomplete_response_is_remote_error(self, make_runtime, memory):
        provider = StubProvider(json_body={"network": "ethereum"})
        with pytest.raises(ActionError) as exc:
            _run(make_runtime(provider), {"network": "ethereum", "credentials": CREDENTIALS})
        assert exc.value.kind == ErrorKind.REMOTE
        assert memory.records() == []

    def test_logging_failure_propagates_after_remote_success(self, make_runtime):
        provider = StubProvider(json_body={"address": "0xabc", "network": "ethereum"})
        runtime = make_runtime(provider, mem=FailingMemory())
        with pytest.raises(RuntimeError, match="memory store unavailable"):
            _run(runtime, {"network": "ethereum", "credentials": CREDENTIALS})
        assert len(provider.requests) == 1
