"""CLI for the Privy wallet actions - run the agent actions from the terminal."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from privy_wallet_actions.actions.registry import Action, ActionRegistry
from privy_wallet_actions.config import DEFAULT_CONFIG_PATH, PrivySettings, load_settings
from privy_wallet_actions.errors import Err
from privy_wallet_actions.logging_config import setup_logging
from privy_wallet_actions.memory import ActionRuntime, JsonlFileMemory
from privy_wallet_actions.plugin import privy_plugin

app = typer.Typer(
    name="privy-actions",
    help="Create Privy server wallets, send transactions and check balances.",
    no_args_is_help=True,
)
console = Console()

_app_id: str = ""
_secret: str = ""
_config_path: Path = DEFAULT_CONFIG_PATH
_verbose: bool = False


def _version_callback(value: bool):
    if value:
        from importlib.metadata import version
        console.print(f"privy-wallet-actions {version('privy-wallet-actions')}")
        raise typer.Exit()


@app.callback()
def main(
    app_id: str = typer.Option("", "--app-id", help="Privy App ID", envvar="PRIVY_APP_ID"),
    secret: str = typer.Option(
        "", "--secret", help="Privy API secret", envvar="PRIVY_APP_SECRET", show_default=False
    ),
    config: Path = typer.Option(
        DEFAULT_CONFIG_PATH, "--config", "-c", help="Settings file (YAML)", envvar="PRIVY_ACTIONS_CONFIG"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
):
    """Create Privy server wallets, send transactions and check balances."""
    global _app_id, _secret, _config_path, _verbose
    _app_id = app_id
    _secret = secret
    _config_path = config
    _verbose = verbose


def _make_runtime(settings: PrivySettings) -> ActionRuntime:
    return ActionRuntime(memory=JsonlFileMemory(Path(settings.memory_path)), settings=settings)


def _invoke(act: Action, payload: dict[str, Any]) -> None:
    """Run *act* with the global credentials and print the outcome."""
    settings = load_settings(_config_path)
    setup_logging(_verbose or settings.verbose)
    runtime = _make_runtime(settings)

    payload = {k: v for k, v in payload.items() if v is not None}
    payload["credentials"] = {"appId": _app_id, "secret": _secret}

    outcome = asyncio.run(act.run(runtime, payload))
    if isinstance(outcome, Err):
        console.print(f"[red]Error ({outcome.kind.value}):[/red] {escape(outcome.message)}")
        raise typer.Exit(1)
    console.print_json(json.dumps(outcome.value.to_wire()))


def _action(name: str) -> Action:
    act = privy_plugin.get_action(name)
    assert act is not None, f"action {name} is not bundled in the plugin"
    return act


# ------------------------------------------------------------------
# Commands
# ------------------------------------------------------------------


@app.command("actions")
def list_actions():
    """List the registered actions."""
    table = Table(title="Registered actions")
    table.add_column("Name", style="cyan")
    table.add_column("Description")
    table.add_column("Similes", style="dim")
    for act in ActionRegistry.get().get_actions():
        table.add_row(act.name, act.description, ", ".join(act.similes))
    console.print(table)


@app.command("create-wallet")
def create_wallet_cmd(
    network: str = typer.Argument(..., help="Network to create the wallet on"),
    custom_id: Optional[str] = typer.Option(None, "--custom-id", help="Caller-defined wallet id"),
    tag: Optional[list[str]] = typer.Option(None, "--tag", "-t", help="Tag (repeatable)"),
    description: Optional[str] = typer.Option(None, "--description", "-d"),
):
    """Create a new server wallet."""
    metadata = {
        k: v
        for k, v in {"customId": custom_id, "tags": tag or None, "description": description}.items()
        if v is not None
    }
    _invoke(_action("createWallet"), {"network": network, "metadata": metadata or None})


@app.command("send")
def send_cmd(
    wallet_address: str = typer.Argument(..., help="Sending server wallet"),
    network: str = typer.Argument(...),
    to: str = typer.Argument(..., help="Recipient address"),
    value: str = typer.Argument(..., help="Amount in native currency"),
    data: Optional[str] = typer.Option(None, "--data", help="Call data"),
    idempotency_key: Optional[str] = typer.Option(None, "--idempotency-key"),
    third_party_gas: bool = typer.Option(False, "--third-party-gas", help="Let the provider pay gas"),
):
    """Send a transaction from a server wallet."""
    _invoke(
        _action("sendTransaction"),
        {
            "walletAddress": wallet_address,
            "network": network,
            "to": to,
            "value": value,
            "data": data,
            "idempotencyKey": idempotency_key,
            "useThirdPartyGas": third_party_gas or None,
        },
    )


@app.command("balance")
def balance_cmd(
    wallet_address: str = typer.Argument(...),
    network: str = typer.Argument(...),
):
    """Show one wallet's native and token balances."""
    _invoke(_action("getBalance"), {"walletAddress": wallet_address, "network": network})


@app.command("aggregate")
def aggregate_cmd(
    wallet_id: Optional[list[str]] = typer.Option(None, "--wallet-id", "-w", help="Wallet address (repeatable)"),
    tag: Optional[list[str]] = typer.Option(None, "--tag", "-t", help="Tag (repeatable)"),
    network: Optional[str] = typer.Option(None, "--network", "-n"),
):
    """Show the total balance across wallets selected by id or tag."""
    _invoke(
        _action("getAggregatedBalance"),
        {"walletIds": wallet_id or None, "tags": tag or None, "network": network},
    )


@app.command("history")
def history_cmd(
    last: int = typer.Option(20, "--last", "-n", min=0, help="Number of entries to show"),
):
    """Show logged wallet creations, transactions and balance queries."""
    settings = load_settings(_config_path)
    records = JsonlFileMemory(Path(settings.memory_path)).records(last_n=last)
    if not records:
        console.print("[dim]No history yet.[/dim]")
        return

    table = Table(title=f"Last {len(records)} entries")
    table.add_column("Time", style="dim")
    table.add_column("Type", style="cyan")
    table.add_column("Network")
    table.add_column("Detail")
    for rec in records:
        meta = rec.metadata
        detail = meta.get("hash") or meta.get("address") or ""
        if "walletCount" in meta:
            detail = f"{meta['walletCount']} wallets"
        table.add_row(str(meta.get("timestamp", "")), str(meta.get("type", rec.type)), str(meta.get("network", "")), detail)
    console.print(table)


if __name__ == "__main__":
    app()
