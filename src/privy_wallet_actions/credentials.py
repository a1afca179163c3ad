"""Credential guard shared by every action."""

from __future__ import annotations

from typing import Any

from privy_wallet_actions.errors import ActionError
from privy_wallet_actions.models import Credentials

MISSING_CREDENTIALS = "Missing required credentials"

# JSON schema fragment reused in each action's parameter schema.
CREDENTIALS_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "appId": {
            "type": "string",
            "description": "Privy App ID",
        },
        "secret": {
            "type": "string",
            "description": "Privy API Secret",
        },
    },
    "required": ["appId", "secret"],
}


def has_credentials(credentials: Credentials | None) -> bool:
    if credentials is None:
        return False
    app_id = (credentials.app_id or "").strip()
    secret = (credentials.secret or "").strip()
    return bool(app_id and secret)


def require_credentials(credentials: Credentials | None) -> Credentials:
    """Return *credentials* if both fields are set, else raise a validation error."""
    if not has_credentials(credentials):
        raise ActionError.validation(MISSING_CREDENTIALS)
    return credentials
