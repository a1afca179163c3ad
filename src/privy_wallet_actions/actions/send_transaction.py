"""sendTransaction - send value from a Privy server wallet.

One request per call. The idempotency key is forwarded as given; nothing
is retried here.
"""

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
    LogType,
    SendTransactionRequest,
    SendTransactionResult,
    TransactionLogEntry,
    WalletMetadata,
)
from privy_wallet_actions.transaction_logger import log_transaction

logger = logging.getLogger("privy_wallet_actions.actions.send_transaction")


@action(
    "sendTransaction",
    "Sends a transaction from a Privy server wallet",
    {
        "type": "object",
        "properties": {
            "walletAddress": {
                "type": "string",
                "description": "Address of the server wallet",
            },
            "network": {
                "type": "string",
                "description": "Blockchain network to send the transaction on",
            },
            "to": {
                "type": "string",
                "description": "Recipient address",
            },
            "value": {
                "type": "string",
                "description": "Amount to send (in native currency)",
            },
            "data": {
                "type": "string",
                "description": "Optional transaction data",
            },
            "idempotencyKey": {
                "type": "string",
                "description": "Optional key the provider uses to deduplicate retried submissions",
            },
            "useThirdPartyGas": {
                "type": "boolean",
                "description": "Have the provider sponsor the gas fees instead of the sending wallet",
            },
            "credentials": CREDENTIALS_SCHEMA,
        },
        "required": ["walletAddress", "network", "to", "value", "credentials"],
    },
    request_model=SendTransactionRequest,
    similes=[
        "send tokens",
        "transfer funds",
        "make a transaction",
    ],
    examples=[
        [
            {"user": "{{user1}}", "content": {"text": "Send 0.1 ETH from wallet 0xabc... to 0x123..."}},
            {"user": "{{agentName}}", "content": {"text": "Transaction sent successfully. Hash: 0x789..."}},
        ],
        [
            {"user": "{{user1}}", "content": {"text": "Transfer 1 SOL from wallet abc to xyz"}},
            {"user": "{{agentName}}", "content": {"text": "Transaction sent successfully. Hash: abc123..."}},
        ],
    ],
)
async def send_transaction(runtime: Any, request: SendTransactionRequest) -> SendTransactionResult:
    credentials = require_credentials(request.credentials)
    client = PrivyClient(credentials, runtime_settings(runtime), runtime_transport(runtime))

    data = await client.send_transaction(request.wallet_address, request.body())
    try:
        transaction = SendTransactionResult(
            hash=data.get("hash"),
            network=request.network,
            from_=request.wallet_address,
            to=request.to,
            value=request.value,
            gas_used=data.get("gasUsed"),
            gas_payed_by=request.gas_payer,
        )
    except ValidationError as e:
        raise ActionError(
            ErrorKind.REMOTE, "Failed to send transaction: response is missing the transaction hash"
        ) from e

    await log_transaction(
        runtime,
        TransactionLogEntry(
            type=LogType.TRANSACTION,
            hash=transaction.hash,
            network=transaction.network,
            from_=transaction.from_,
            to=transaction.to,
            value=transaction.value,
            metadata=WalletMetadata(
                use_third_party_gas=bool(request.use_third_party_gas),
                gas_used=transaction.gas_used,
                gas_payed_by=transaction.gas_payed_by,
            ),
        ),
    )

    logger.info(
        f"Sent {transaction.value} on {transaction.network} from {transaction.from_} "
        f"to {transaction.to}: {transaction.hash}"
    )
    return transaction
