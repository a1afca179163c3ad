"""Configuration for the Privy wallet actions.

Settings are loaded from a YAML file with environment variable expansion.
Credentials are deliberately absent: they travel with each request.
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

DEFAULT_API_BASE_URL = "https://auth.privy.io"
DEFAULT_CONFIG_PATH = Path(".privy-actions") / "config.yaml"

_PLACEHOLDER = re.compile(r"\$\{([^}]+)\}")


def _substitute_env(value: Any) -> Any:
    """``${NAME}`` in string settings becomes ``$NAME``'s value; unset names stay literal."""
    if isinstance(value, dict):
        return {key: _substitute_env(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_substitute_env(item) for item in value]
    if isinstance(value, str):
        return _PLACEHOLDER.sub(lambda m: os.environ.get(m.group(1), m.group(0)), value)
    return value


class PrivySettings(BaseModel):
    """Where and how to reach the Privy server-wallet API."""

    api_base_url: str = DEFAULT_API_BASE_URL
    timeout: float = Field(default=30.0, gt=0)  # seconds, applies to every request
    memory_path: str = str(Path(".privy-actions") / "memory.jsonl")
    verbose: bool = False


def load_settings(path: Path | None = None) -> PrivySettings:
    """Load settings from a YAML file, falling back to defaults.

    A missing file yields the default settings.
    """
    if path is None:
        path = DEFAULT_CONFIG_PATH
    if not path.exists():
        return PrivySettings()
    raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    return PrivySettings.model_validate(_substitute_env(raw))


def save_settings(settings: PrivySettings, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    data = settings.model_dump(mode="python", exclude_none=True)
    with open(path, "w", encoding="utf-8") as fh:
        yaml.dump(data, fh, default_flow_style=False, sort_keys=False)
