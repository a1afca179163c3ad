"""getAggregatedBalance - total balance across wallets selected by id or tag."""

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
    BalanceQueryLogEntry,
    GetAggregatedBalanceRequest,
    GetAggregatedBalanceResult,
)
from privy_wallet_actions.transaction_logger import log_balance_query

logger = logging.getLogger("privy_wallet_actions.actions.get_aggregated_balance")


@action(
    "getAggregatedBalance",
    "Get aggregated balance for multiple wallets by IDs or tags",
    {
        "type": "object",
        "properties": {
            "walletIds": {
                "type": "array",
                "items": {"type": "string"},
                "description": "List of wallet addresses to query",
            },
            "tags": {
                "type": "array",
                "items": {"type": "string"},
                "description": "List of tags to filter wallets by",
            },
            "network": {
                "type": "string",
                "description": "Optional network to filter balances by",
            },
            "credentials": CREDENTIALS_SCHEMA,
        },
        "anyOf": [
            {"required": ["walletIds", "credentials"]},
            {"required": ["tags", "credentials"]},
        ],
    },
    request_model=GetAggregatedBalanceRequest,
    similes=[
        "total balance across wallets",
        "sum balances by tag",
        "aggregate wallet balances",
    ],
    examples=[
        [
            {"user": "{{user1}}", "content": {"text": "What is the total balance of wallets tagged treasury?"}},
            {"user": "{{agentName}}", "content": {"text": "3 wallets tagged treasury hold 12.4 ETH in total"}},
        ],
        [
            {"user": "{{user1}}", "content": {"text": "Sum the balances of 0xabc... and 0xdef... on Base"}},
            {"user": "{{agentName}}", "content": {"text": "The 2 wallets hold 0.75 ETH on Base"}},
        ],
    ],
)
async def get_aggregated_balance(
    runtime: Any, request: GetAggregatedBalanceRequest
) -> GetAggregatedBalanceResult:
    credentials = require_credentials(request.credentials)
    missing = request.missing_selector()
    if missing:
        raise ActionError.validation(missing)

    client = PrivyClient(credentials, runtime_settings(runtime), runtime_transport(runtime))
    data = await client.get_aggregated_balance(request.body())
    try:
        result = GetAggregatedBalanceResult.model_validate(data)
    except ValidationError as e:
        raise ActionError(
            ErrorKind.REMOTE,
            "Failed to get aggregated balance: response is missing balances or totalBalance",
        ) from e

    await log_balance_query(
        runtime,
        BalanceQueryLogEntry(
            wallet_ids=request.wallet_ids or None,
            tags=request.tags or None,
            network=request.network,
            total_balance=result.total_balance,
            wallet_count=len(result.balances),
        ),
    )

    logger.info(
        f"Aggregated {len(result.balances)} wallets on {request.network or 'all networks'}: "
        f"{result.total_balance}"
    )
    return result
