"""Async client for the Privy server-wallet REST API.

Uses httpx directly. A fresh ``AsyncClient`` is opened per call so that no
connection state is shared between concurrent actions.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx

from privy_wallet_actions.config import PrivySettings
from privy_wallet_actions.errors import ActionError, ErrorKind
from privy_wallet_actions.models import Credentials

logger = logging.getLogger("privy_wallet_actions.client")

SERVER_WALLETS_PATH = "/api/v1/server_wallets"


def _remote_message(response: httpx.Response) -> str | None:
    """Pull the provider's ``message`` field out of an error body, if any."""
    try:
        data = response.json()
    except ValueError:
        return None
    if isinstance(data, dict):
        message = data.get("message")
        if message:
            return str(message)
    return None


class PrivyClient:
    """One authenticated request at a time against the Privy API.

    Parameters
    ----------
    credentials:
        App id and secret, already checked by the credential guard.
    settings:
        Base URL and timeout.
    transport:
        Optional httpx transport; ``None`` means the real network.
    """

    def __init__(
        self,
        credentials: Credentials,
        settings: PrivySettings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._credentials = credentials
        self._settings = settings or PrivySettings()
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._credentials.secret}",
            "X-App-Id": self._credentials.app_id,
        }

    async def request(
        self,
        method: str,
        path: str,
        *,
        operation: str,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Send one request and return the decoded JSON object.

        ``operation`` is the human phrase used in error messages, e.g.
        ``"create wallet"`` gives ``"Failed to create wallet: ..."``.
        """
        try:
            async with httpx.AsyncClient(
                base_url=self._settings.api_base_url,
                timeout=self._settings.timeout,
                transport=self._transport,
            ) as client:
                resp = await client.request(
                    method,
                    path,
                    json=json,
                    params=params,
                    headers=self._headers(),
                )
                resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            detail = _remote_message(e.response) or str(e)
            logger.warning(f"Privy API error on {method} {path}: {e.response.status_code} {detail}")
            raise ActionError(
                ErrorKind.REMOTE,
                f"Failed to {operation}: {detail}",
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            logger.warning(f"Privy API unreachable on {method} {path}: {e}")
            raise ActionError(ErrorKind.TRANSPORT, f"Failed to {operation}: {e}") from e

        try:
            data = resp.json()
        except ValueError as e:
            raise ActionError(
                ErrorKind.REMOTE,
                f"Failed to {operation}: response is not valid JSON",
                status_code=resp.status_code,
            ) from e
        if not isinstance(data, dict):
            raise ActionError(
                ErrorKind.REMOTE,
                f"Failed to {operation}: unexpected response shape",
                status_code=resp.status_code,
            )
        return data

    # ------------------------------------------------------------------
    # Endpoints
    # ------------------------------------------------------------------

    async def create_wallet(self, body: dict[str, Any]) -> dict[str, Any]:
        return await self.request(
            "POST", SERVER_WALLETS_PATH, json=body, operation="create wallet"
        )

    async def send_transaction(self, wallet_address: str, body: dict[str, Any]) -> dict[str, Any]:
        return await self.request(
            "POST",
            f"{SERVER_WALLETS_PATH}/{quote(wallet_address, safe='')}/transactions",
            json=body,
            operation="send transaction",
        )

    async def get_balance(self, wallet_address: str, network: str) -> dict[str, Any]:
        return await self.request(
            "GET",
            f"{SERVER_WALLETS_PATH}/{quote(wallet_address, safe='')}/balance",
            params={"network": network},
            operation="get balance",
        )

    async def get_aggregated_balance(self, body: dict[str, Any]) -> dict[str, Any]:
        return await self.request(
            "POST",
            f"{SERVER_WALLETS_PATH}/balances/aggregate",
            json=body,
            operation="get aggregated balance",
        )
