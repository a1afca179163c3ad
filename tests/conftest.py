"""Shared fixtures: a stub Privy API and in-memory host memory."""

import json

import httpx
import pytest

from privy_wallet_actions.memory import ActionRuntime, InMemoryMemory, MemoryRecord

CREDENTIALS = {"appId": "a", "secret": "s"}


class StubProvider:
    """Stands in for the Privy API. Records every request it receives."""

    def __init__(self, status_code=200, json_body=None, text=None, error=None):
        self.status_code = status_code
        self.json_body = json_body if json_body is not None else {}
        self.text = text
        self.error = error
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error(request)
        if self.text is not None:
            return httpx.Response(self.status_code, text=self.text)
        return httpx.Response(self.status_code, json=self.json_body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    @property
    def last_request(self) -> httpx.Request:
        assert self.requests, "no request was sent"
        return self.requests[-1]

    def last_body(self) -> dict:
        return json.loads(self.last_request.content)


class FailingMemory:
    async def remember(self, record: MemoryRecord) -> None:
        raise RuntimeError("memory store unavailable")


@pytest.fixture
def memory():
    return InMemoryMemory()


@pytest.fixture
def make_runtime(memory):
    def _make(provider: StubProvider, mem=None) -> ActionRuntime:
        return ActionRuntime(memory=mem or memory, transport=provider.transport)

    return _make
