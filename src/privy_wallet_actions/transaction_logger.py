"""Forward action outcomes to the host's memory.

Errors from the memory are not caught here; they surface as the action's
own failure.
"""

from __future__ import annotations

import logging
from typing import Any

from privy_wallet_actions.memory import MemoryRecord
from privy_wallet_actions.models import BalanceQueryLogEntry, TransactionLogEntry

logger = logging.getLogger("privy_wallet_actions.transaction_logger")

TRANSACTION_RECORD_TYPE = "blockchain_transaction"
BALANCE_QUERY_RECORD_TYPE = "balance_query"

_OPTIONAL_METADATA_FIELDS = ("hash", "from", "to", "address", "metadata")


def transaction_record(entry: TransactionLogEntry) -> MemoryRecord:
    wire = entry.to_wire()
    metadata: dict[str, Any] = {
        "type": wire["type"],
        "network": wire["network"],
        "timestamp": wire["timestamp"],
    }
    for key in _OPTIONAL_METADATA_FIELDS:
        if wire.get(key):
            metadata[key] = wire[key]
    return MemoryRecord(
        type=TRANSACTION_RECORD_TYPE,
        content=entry.model_dump_json(by_alias=True, exclude_none=True),
        metadata=metadata,
    )


def balance_query_record(entry: BalanceQueryLogEntry) -> MemoryRecord:
    return MemoryRecord(
        type=BALANCE_QUERY_RECORD_TYPE,
        content=entry.model_dump_json(by_alias=True, exclude_none=True),
        metadata={
            "type": entry.type.value,
            "network": entry.network or "all",
            "timestamp": entry.timestamp,
            "walletCount": entry.wallet_count,
        },
    )


async def log_transaction(runtime: Any, entry: TransactionLogEntry) -> None:
    """Append a wallet-creation or transaction entry to ``runtime.memory``."""
    await runtime.memory.remember(transaction_record(entry))
    logger.debug(f"Logged {entry.type.value} on {entry.network}")


async def log_balance_query(runtime: Any, entry: BalanceQueryLogEntry) -> None:
    """Append an aggregated-balance query entry to ``runtime.memory``."""
    await runtime.memory.remember(balance_query_record(entry))
    logger.debug(f"Logged {entry.type.value} across {entry.wallet_count} wallets")
