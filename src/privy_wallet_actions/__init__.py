"""Privy server-wallet actions for conversational agent runtimes.

Exposes four actions (createWallet, sendTransaction, getBalance,
getAggregatedBalance) that forward validated requests to the Privy
server-wallet API and record outcomes in the host's memory.
"""

from privy_wallet_actions.actions.create_wallet import create_wallet as create_wallet_action
from privy_wallet_actions.actions.get_aggregated_balance import (
    get_aggregated_balance as get_aggregated_balance_action,
)
from privy_wallet_actions.actions.get_balance import get_balance as get_balance_action
from privy_wallet_actions.actions.registry import Action, ActionRegistry
from privy_wallet_actions.actions.send_transaction import send_transaction as send_transaction_action
from privy_wallet_actions.errors import ActionError, ActionResult, Err, ErrorKind, Ok
from privy_wallet_actions.memory import ActionRuntime, InMemoryMemory, JsonlFileMemory, Memory, MemoryRecord
from privy_wallet_actions.plugin import Plugin, privy_plugin

__all__ = [
    "Action",
    "ActionError",
    "ActionRegistry",
    "ActionResult",
    "ActionRuntime",
    "Err",
    "ErrorKind",
    "InMemoryMemory",
    "JsonlFileMemory",
    "Memory",
    "MemoryRecord",
    "Ok",
    "Plugin",
    "create_wallet_action",
    "get_aggregated_balance_action",
    "get_balance_action",
    "privy_plugin",
    "send_transaction_action",
]
