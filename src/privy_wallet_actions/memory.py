"""Host memory capability and the runtime handed to each action.

Actions depend only on ``runtime.memory.remember(record)``; the host
supplies the real store. ``InMemoryMemory`` and ``JsonlFileMemory`` cover
tests and the command-line front end.
"""

from __future__ import annotations

import asyncio
import json
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

import httpx

from privy_wallet_actions.config import PrivySettings


@dataclass(frozen=True)
class MemoryRecord:
    type: str
    content: str  # full log entry as JSON
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@runtime_checkable
class Memory(Protocol):
    async def remember(self, record: MemoryRecord) -> None: ...


class InMemoryMemory:
    """List-backed memory."""

    def __init__(self) -> None:
        self._records: list[MemoryRecord] = []

    async def remember(self, record: MemoryRecord) -> None:
        self._records.append(record)

    def records(self) -> list[MemoryRecord]:
        return list(self._records)


class JsonlFileMemory:
    """Append-only memory writing one JSON object per line."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    async def remember(self, record: MemoryRecord) -> None:
        line = json.dumps(record.to_dict(), separators=(",", ":"))
        await asyncio.to_thread(self._append, line)

    def _append(self, line: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "a", encoding="utf-8") as fh:
            fh.write(line + "\n")

    def records(self, last_n: int | None = None) -> list[MemoryRecord]:
        """Read records back, oldest first. Returns [] if no file."""
        if not self.path.exists():
            return []
        records = []
        for line in self.path.read_text(encoding="utf-8").splitlines():
            line = line.strip()
            if not line:
                continue
            records.append(MemoryRecord(**json.loads(line)))
        if last_n is not None:
            records = records[-last_n:] if last_n > 0 else []
        return records


@dataclass
class ActionRuntime:
    """Concrete runtime context for hosts without their own.

    ``transport`` replaces httpx's network transport, which is how tests
    stand in for the provider.
    """

    memory: Memory
    settings: PrivySettings = field(default_factory=PrivySettings)
    transport: httpx.AsyncBaseTransport | None = None


def runtime_settings(runtime: Any) -> PrivySettings:
    return getattr(runtime, "settings", None) or PrivySettings()


def runtime_transport(runtime: Any) -> httpx.AsyncBaseTransport | None:
    return getattr(runtime, "transport", None)
