"""createWallet - provision a new Privy server wallet."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from privy_wallet_actions.actions.registry import action
from privy_wallet_actions.client import PrivyClient
from privy_wallet_actions.credentials import CREDENTIALS_SCHEMA, require_credentials
from privy_wallet_actions.errors import ActionError, ErrorKind
from privy_wallet_actions.memory import runtime_settings, runtime_transport
from privy_wallet_actions.models import (
    CreateWalletRequest,
    CreateWalletResult,
    LogType,
    TransactionLogEntry,
)
from privy_wallet_actions.transaction_logger import log_transaction

logger = logging.getLogger("privy_wallet_actions.actions.create_wallet")


@action(
    "createWallet",
    "Creates a new Privy server wallet",
    {
        "type": "object",
        "properties": {
            "network": {
                "type": "string",
                "description": "Blockchain network to create the wallet on",
            },
            "metadata": {
                "type": "object",
                "description": "Optional labels stored with the wallet",
                "properties": {
                    "customId": {"type": "string", "description": "Caller-defined wallet id"},
                    "tags": {
                        "type": "array",
                        "items": {"type": "string"},
                        "description": "Tags used to group wallets for aggregated balances",
                    },
                    "description": {"type": "string", "description": "Free-form description"},
                },
            },
            "credentials": CREDENTIALS_SCHEMA,
        },
        "required": ["network", "credentials"],
    },
    request_model=CreateWalletRequest,
    similes=[
        "create a new wallet",
        "initialize a blockchain wallet",
        "set up a new wallet",
    ],
    examples=[
        [
            {"user": "{{user1}}", "content": {"text": "Create a new wallet on Ethereum network"}},
            {
                "user": "{{agentName}}",
                "content": {"text": "Created new wallet on Ethereum network with address 0xabc..."},
            },
        ],
        [
            {"user": "{{user1}}", "content": {"text": "Initialize a server wallet on Polygon"}},
            {
                "user": "{{agentName}}",
                "content": {"text": "Initialized new wallet on Polygon network with address 0xdef..."},
            },
        ],
    ],
)
async def create_wallet(runtime: Any, request: CreateWalletRequest) -> CreateWalletResult:
    credentials = require_credentials(request.credentials)
    client = PrivyClient(credentials, runtime_settings(runtime), runtime_transport(runtime))

    data = await client.create_wallet(request.body())
    try:
        wallet = CreateWalletResult.model_validate(data)
    except ValidationError as e:
        raise ActionError(
            ErrorKind.REMOTE, "Failed to create wallet: response is missing address or network"
        ) from e

    await log_transaction(
        runtime,
        TransactionLogEntry(
            type=LogType.WALLET_CREATION,
            network=wallet.network,
            address=wallet.address,
            metadata=request.metadata,
        ),
    )

    logger.info(f"Created wallet {wallet.address} on {wallet.network}")
    return wallet
