"""getBalance - read one server wallet's balances. Writes nothing to memory."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from privy_wallet_actions.actions.registry import action
from privy_wallet_actions.client import PrivyClient
from privy_wallet_actions.credentials import CREDENTIALS_SCHEMA, require_credentials
from privy_wallet_actions.errors import ActionError, ErrorKind
from privy_wallet_actions.memory import runtime_settings, runtime_transport
from privy_wallet_actions.models import GetBalanceRequest, GetBalanceResult

logger = logging.getLogger("privy_wallet_actions.actions.get_balance")


@action(
    "getBalance",
    "Gets the balance of a Privy server wallet",
    {
        "type": "object",
        "properties": {
            "walletAddress": {
                "type": "string",
                "description": "Address of the server wallet",
            },
            "network": {
                "type": "string",
                "description": "Blockchain network to check balance on",
            },
            "credentials": CREDENTIALS_SCHEMA,
        },
        "required": ["walletAddress", "network", "credentials"],
    },
    request_model=GetBalanceRequest,
    similes=[
        "check wallet balance",
        "view account balance",
        "get token balance",
    ],
    examples=[
        [
            {"user": "{{user1}}", "content": {"text": "Check balance of wallet 0xabc... on Ethereum"}},
            {"user": "{{agentName}}", "content": {"text": "Wallet 0xabc... has a balance of 1.5 ETH"}},
        ],
        [
            {"user": "{{user1}}", "content": {"text": "Get balance for address 0x123... on Polygon"}},
            {"user": "{{agentName}}", "content": {"text": "Wallet 0x123... has a balance of 100 MATIC"}},
        ],
    ],
)
async def get_balance(runtime: Any, request: GetBalanceRequest) -> GetBalanceResult:
    credentials = require_credentials(request.credentials)
    client = PrivyClient(credentials, runtime_settings(runtime), runtime_transport(runtime))

    data = await client.get_balance(request.wallet_address, request.network)
    try:
        result = GetBalanceResult(
            address=request.wallet_address,
            network=request.network,
            native_balance=data.get("nativeBalance"),
            tokens=data.get("tokens"),
        )
    except ValidationError as e:
        raise ActionError(
            ErrorKind.REMOTE, "Failed to get balance: response is missing nativeBalance"
        ) from e

    logger.info(f"Balance of {result.address} on {result.network}: {result.native_balance}")
    return result
