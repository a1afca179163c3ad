"""Action registry - register and discover actions for the host runtime."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable

from pydantic import BaseModel, ValidationError

from privy_wallet_actions.credentials import has_credentials
from privy_wallet_actions.errors import ActionError, ActionResult, Err, Ok
from privy_wallet_actions.models import ActionRequest

logger = logging.getLogger("privy_wallet_actions.actions.registry")

Handler = Callable[[Any, Any], Awaitable[BaseModel]]


def _describe_validation_error(error: ValidationError) -> str:
    parts = []
    for err in error.errors():
        loc = ".".join(str(p) for p in err["loc"]) or "request"
        parts.append(f"{loc}: {err['msg']}")
    return "; ".join(parts)


@dataclass
class Action:
    name: str
    description: str
    parameters: dict[str, Any]
    request_model: type[ActionRequest]
    func: Handler
    similes: list[str] = field(default_factory=list)
    examples: list[list[dict[str, Any]]] = field(default_factory=list)

    def to_definition(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "similes": list(self.similes),
            "examples": self.examples,
            "parameters": self.parameters,
        }

    def parse(self, request: ActionRequest | Mapping[str, Any]) -> ActionRequest:
        """Coerce message content into this action's request model."""
        if isinstance(request, self.request_model):
            return request
        if isinstance(request, BaseModel):
            request = request.model_dump(by_alias=True)
        try:
            return self.request_model.model_validate(request)
        except ValidationError as e:
            raise ActionError.validation(
                f"Invalid {self.name} request: {_describe_validation_error(e)}"
            ) from e

    def validate(self, content: ActionRequest | Mapping[str, Any] | None) -> bool:
        """Cheap pre-check the host runs before dispatching. Never raises."""
        if content is None:
            return False
        try:
            request = self.parse(content)
        except ActionError:
            return False
        return has_credentials(request.credentials) and request.missing_selector() is None

    async def handler(self, runtime: Any, request: ActionRequest | Mapping[str, Any]) -> BaseModel:
        return await self.func(runtime, self.parse(request))

    async def run(self, runtime: Any, request: ActionRequest | Mapping[str, Any]) -> ActionResult:
        """Like :meth:`handler` but returns ``Ok``/``Err`` instead of raising ActionError."""
        try:
            return Ok(await self.handler(runtime, request))
        except ActionError as e:
            logger.info(f"{self.name} failed ({e.kind.value}): {e.message}")
            return Err.from_error(e)


class ActionRegistry:
    """Global registry of available actions."""

    _instance: ActionRegistry | None = None
    _actions: dict[str, Action]

    def __init__(self):
        self._actions = {}

    @classmethod
    def get(cls) -> ActionRegistry:
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def register(self, action: Action) -> None:
        self._actions[action.name] = action

    def get_action(self, name: str) -> Action | None:
        return self._actions.get(name)

    def get_actions(self, names: list[str] | None = None) -> list[Action]:
        if names is None:
            return list(self._actions.values())
        return [self._actions[n] for n in names if n in self._actions]

    def list_names(self) -> list[str]:
        return list(self._actions.keys())


def action(
    name: str,
    description: str,
    parameters: dict[str, Any],
    *,
    request_model: type[ActionRequest],
    similes: list[str] | None = None,
    examples: list[list[dict[str, Any]]] | None = None,
):
    """Decorator to register a coroutine as an action.

    Usage:
        @action("getBalance", "Gets the balance of a wallet", {...},
                request_model=GetBalanceRequest)
        async def get_balance(runtime, request: GetBalanceRequest) -> GetBalanceResult:
            ...

    The decorated name is bound to the :class:`Action`, not the bare coroutine.
    """

    def decorator(func: Handler) -> Action:
        a = Action(
            name=name,
            description=description,
            parameters=parameters,
            request_model=request_model,
            func=func,
            similes=list(similes or []),
            examples=list(examples or []),
        )
        ActionRegistry.get().register(a)
        return a

    return decorator
