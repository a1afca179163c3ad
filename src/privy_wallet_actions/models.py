"""Pydantic models for action requests, results and log entries.

Wire names are camelCase (the provider's and the host's convention);
attribute names are snake_case. Either spelling is accepted on input.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Recorded as ``gasPayedBy`` when the provider sponsors the fees.
THIRD_PARTY_GAS_PAYER = "third-party"


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with milliseconds and a ``Z`` suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class WalletModel(BaseModel):
    """Base for every value record: frozen, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        coerce_numbers_to_str=True,
    )

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# ---------------------------------------------------------------------------
# Shared pieces
# ---------------------------------------------------------------------------


class Credentials(WalletModel):
    """Privy app id and API secret. Never persisted or logged."""

    app_id: Optional[str] = None
    secret: Optional[str] = Field(default=None, repr=False)


class WalletMetadata(WalletModel):
    custom_id: Optional[str] = None
    tags: Optional[list[str]] = None
    description: Optional[str] = None
    use_third_party_gas: Optional[bool] = None
    gas_used: Optional[str] = None
    gas_payed_by: Optional[str] = None


class ActionRequest(WalletModel):
    """Fields common to every action request."""

    credentials: Optional[Credentials] = None

    def missing_selector(self) -> str | None:
        """Return a message when the request names nothing to act on."""
        return None


# ---------------------------------------------------------------------------
# createWallet
# ---------------------------------------------------------------------------


class CreateWalletRequest(ActionRequest):
    network: str = Field(min_length=1)
    metadata: Optional[WalletMetadata] = None

    def body(self) -> dict[str, Any]:
        return self.model_dump(
            mode="json", by_alias=True, exclude_none=True, include={"network", "metadata"}
        )


class CreateWalletResult(WalletModel):
    address: str
    network: str


# ---------------------------------------------------------------------------
# sendTransaction
# ---------------------------------------------------------------------------


class SendTransactionRequest(ActionRequest):
    wallet_address: str = Field(min_length=1)
    network: str = Field(min_length=1)
    to: str = Field(min_length=1)
    value: str = Field(min_length=1)  # native units, validated by the provider
    data: Optional[str] = None
    idempotency_key: Optional[str] = None
    use_third_party_gas: Optional[bool] = None

    def body(self) -> dict[str, Any]:
        return self.model_dump(
            mode="json",
            by_alias=True,
            exclude_none=True,
            include={"network", "to", "value", "data", "idempotency_key", "use_third_party_gas"},
        )

    @property
    def gas_payer(self) -> str:
        return THIRD_PARTY_GAS_PAYER if self.use_third_party_gas else self.wallet_address


class SendTransactionResult(WalletModel):
    hash: str
    network: str
    from_: str = Field(alias="from")
    to: str
    value: str
    gas_used: Optional[str] = None
    gas_payed_by: Optional[str] = None


# ---------------------------------------------------------------------------
# getBalance
# ---------------------------------------------------------------------------


class GetBalanceRequest(ActionRequest):
    wallet_address: str = Field(min_length=1)
    network: str = Field(min_length=1)


class TokenBalance(WalletModel):
    token: str
    amount: str
    symbol: str
    decimals: int


class GetBalanceResult(WalletModel):
    address: str
    network: str
    native_balance: str
    tokens: Optional[list[TokenBalance]] = None


# ---------------------------------------------------------------------------
# getAggregatedBalance
# ---------------------------------------------------------------------------


class GetAggregatedBalanceRequest(ActionRequest):
    wallet_ids: Optional[list[str]] = None
    tags: Optional[list[str]] = None
    network: Optional[str] = None

    def missing_selector(self) -> str | None:
        if not self.wallet_ids and not self.tags:
            return "Either walletIds or tags must be provided"
        return None

    def body(self) -> dict[str, Any]:
        body = self.model_dump(
            mode="json",
            by_alias=True,
            exclude_none=True,
            include={"wallet_ids", "tags", "network"},
        )
        # an empty selector list means "not given", never "no wallets"
        for key in ("walletIds", "tags"):
            if body.get(key) == []:
                del body[key]
        return body


class WalletBalance(WalletModel):
    address: str
    network: str
    balance: str
    metadata: Optional[WalletMetadata] = None


class GetAggregatedBalanceResult(WalletModel):
    balances: list[WalletBalance]
    total_balance: str


# ---------------------------------------------------------------------------
# Log entries
# ---------------------------------------------------------------------------


class LogType(str, Enum):
    WALLET_CREATION = "WALLET_CREATION"
    TRANSACTION = "TRANSACTION"
    AGGREGATED_BALANCE = "AGGREGATED_BALANCE"


class TransactionLogEntry(WalletModel):
    type: LogType
    network: str
    hash: Optional[str] = None
    from_: Optional[str] = Field(default=None, alias="from")
    to: Optional[str] = None
    value: Optional[str] = None
    address: Optional[str] = None
    metadata: Optional[WalletMetadata] = None
    timestamp: str = Field(default_factory=utc_timestamp)


class BalanceQueryLogEntry(WalletModel):
    type: LogType = LogType.AGGREGATED_BALANCE
    wallet_ids: Optional[list[str]] = None
    tags: Optional[list[str]] = None
    network: Optional[str] = None
    total_balance: str
    wallet_count: int
    timestamp: str = Field(default_factory=utc_timestamp)
