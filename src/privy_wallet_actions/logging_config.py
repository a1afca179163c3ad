"""Logging setup for the command-line front end.

Library code only creates named loggers under ``privy_wallet_actions``;
handlers are attached here. A filter redacts bearer secrets in case one
ever reaches a log message.
"""

from __future__ import annotations

import logging
import re

from rich.console import Console
from rich.logging import RichHandler

_BEARER_PATTERN = re.compile(r"(Bearer\s+)[A-Za-z0-9._~+/=-]+")
_SECRET_FIELD_PATTERN = re.compile(r"""(["']?secret["']?\s*[:=]\s*["']?)[^"',\s}]+""", re.IGNORECASE)

LOGGER_NAME = "privy_wallet_actions"


class _SecretScrubFilter(logging.Filter):
    """Redact bearer tokens and ``secret`` values from log messages."""

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = scrub(record.msg)
        return True


def scrub(text: str) -> str:
    text = _BEARER_PATTERN.sub(r"\1[REDACTED]", text)
    return _SECRET_FIELD_PATTERN.sub(r"\1[REDACTED]", text)


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Attach a rich stderr handler to the package logger. Idempotent."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    if any(getattr(h, "_privy_handler", False) for h in logger.handlers):
        return logger

    handler = RichHandler(console=Console(stderr=True), show_path=False)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    handler.addFilter(_SecretScrubFilter())
    handler._privy_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    return logger
