"""Plugin descriptor bundling the wallet actions for the host runtime."""

from __future__ import annotations

from dataclasses import dataclass, field

from privy_wallet_actions.actions.create_wallet import create_wallet
from privy_wallet_actions.actions.get_aggregated_balance import get_aggregated_balance
from privy_wallet_actions.actions.get_balance import get_balance
from privy_wallet_actions.actions.registry import Action
from privy_wallet_actions.actions.send_transaction import send_transaction


@dataclass(frozen=True)
class Plugin:
    name: str
    description: str
    actions: list[Action] = field(default_factory=list)

    def get_action(self, name: str) -> Action | None:
        for a in self.actions:
            if a.name == name:
                return a
        return None


privy_plugin = Plugin(
    name="privy-server-wallets",
    description="Create Privy server wallets, send transactions and read balances",
    actions=[
        create_wallet,
        send_transaction,
        get_balance,
        get_aggregated_balance,
    ],
)
