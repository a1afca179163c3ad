"""Privy server-wallet actions. Importing this package registers them."""

from privy_wallet_actions.actions import create_wallet, send_transaction, get_balance, get_aggregated_balance  # noqa: F401
from privy_wallet_actions.actions.registry import Action, ActionRegistry, action  # noqa: F401
