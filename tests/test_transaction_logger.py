"""Tests for the transaction logger and memory implementations."""

import asyncio
import json

import pytest

from conftest import FailingMemory
from privy_wallet_actions.memory import ActionRuntime, InMemoryMemory, JsonlFileMemory, Memory, MemoryRecord
from privy_wallet_actions.models import BalanceQueryLogEntry, LogType, TransactionLogEntry, WalletMetadata
from privy_wallet_actions.transaction_logger import (
    balance_query_record,
    log_balance_query,
    log_transaction,
    transaction_record,
)


class TestTransactionRecord:
    def test_content_is_full_entry(self):
        entry = TransactionLogEntry(
            type=LogType.TRANSACTION,
            network="ethereum",
            hash="0x789",
            from_="0x1",
            to="0x2",
            value="0.5",
            timestamp="2024-01-01T00:00:00.000Z",
        )
        record = transaction_record(entry)
        assert record.type == "blockchain_transaction"
        assert json.loads(record.content) == {
            "type": "TRANSACTION",
            "network": "ethereum",
            "hash": "0x789",
            "from": "0x1",
            "to": "0x2",
            "value": "0.5",
            "timestamp": "2024-01-01T00:00:00.000Z",
        }

    def test_metadata_is_flattened_subset(self):
        entry = TransactionLogEntry(
            type=LogType.TRANSACTION,
            network="ethereum",
            hash="0x789",
            from_="0x1",
            to="0x2",
            value="0.5",
            metadata=WalletMetadata(use_third_party_gas=False, gas_payed_by="0x1"),
            timestamp="2024-01-01T00:00:00.000Z",
        )
        assert transaction_record(entry).metadata == {
            "type": "TRANSACTION",
            "network": "ethereum",
            "timestamp": "2024-01-01T00:00:00.000Z",
            "hash": "0x789",
            "from": "0x1",
            "to": "0x2",
            "metadata": {"useThirdPartyGas": False, "gasPayedBy": "0x1"},
        }

    def test_absent_fields_omitted(self):
        entry = TransactionLogEntry(type=LogType.WALLET_CREATION, network="base", address="0xabc")
        record = transaction_record(entry)
        assert set(record.metadata) == {"type", "network", "timestamp", "address"}
        assert "hash" not in json.loads(record.content)


class TestBalanceQueryRecord:
    def test_network_defaults_to_all(self):
        entry = BalanceQueryLogEntry(tags=["t"], total_balance="1", wallet_count=1)
        record = balance_query_record(entry)
        assert record.type == "balance_query"
        assert record.metadata["network"] == "all"
        assert record.metadata["walletCount"] == 1
        assert json.loads(record.content)["type"] == "AGGREGATED_BALANCE"


class TestLogFunctions:
    def test_log_transaction_appends(self):
        memory = InMemoryMemory()
        runtime = ActionRuntime(memory=memory)
        entry = TransactionLogEntry(type=LogType.WALLET_CREATION, network="base", address="0xabc")
        asyncio.run(log_transaction(runtime, entry))
        assert len(memory.records()) == 1

    def test_log_balance_query_appends(self):
        memory = InMemoryMemory()
        runtime = ActionRuntime(memory=memory)
        entry = BalanceQueryLogEntry(wallet_ids=["0x1"], total_balance="1", wallet_count=1)
        asyncio.run(log_balance_query(runtime, entry))
        assert memory.records()[0].type == "balance_query"

    def test_memory_failure_propagates(self):
        runtime = ActionRuntime(memory=FailingMemory())
        entry = TransactionLogEntry(type=LogType.WALLET_CREATION, network="base", address="0xabc")
        with pytest.raises(RuntimeError):
            asyncio.run(log_transaction(runtime, entry))


class TestMemoryImplementations:
    def test_protocol(self, tmp_path):
        assert isinstance(InMemoryMemory(), Memory)
        assert isinstance(JsonlFileMemory(tmp_path / "m.jsonl"), Memory)

    def test_jsonl_append_and_read(self, tmp_path):
        memory = JsonlFileMemory(tmp_path / "nested" / "memory.jsonl")
        for i in range(3):
            asyncio.run(memory.remember(MemoryRecord(type="balance_query", content=str(i), metadata={"i": i})))

        records = memory.records()
        assert [r.content for r in records] == ["0", "1", "2"]
        assert memory.records(last_n=2)[0].metadata == {"i": 1}

    @pytest.mark.parametrize("last_n, expected", [(0, []), (1, ["2"]), (5, ["0", "1", "2"])])
    def test_jsonl_last_n_bounds(self, tmp_path, last_n, expected):
        memory = JsonlFileMemory(tmp_path / "memory.jsonl")
        for i in range(3):
            asyncio.run(memory.remember(MemoryRecord(type="balance_query", content=str(i))))
        assert [r.content for r in memory.records(last_n=last_n)] == expected

    def test_jsonl_missing_file(self, tmp_path):
        assert JsonlFileMemory(tmp_path / "none.jsonl").records() == []
