"""Error taxonomy and the tagged result returned by ``Action.run``."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar, Union

T = TypeVar("T")


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    TRANSPORT = "transport"
    REMOTE = "remote"


class ActionError(Exception):
    """Raised by an action when a request cannot be fulfilled.

    ``kind`` tells the caller whether the request itself was bad
    (validation), the provider could not be reached (transport) or the
    provider rejected the call (remote).
    """

    def __init__(self, kind: ErrorKind, message: str, status_code: int | None = None):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.status_code = status_code

    @classmethod
    def validation(cls, message: str) -> ActionError:
        return cls(ErrorKind.VALIDATION, message)

    def __repr__(self) -> str:
        return f"ActionError(kind={self.kind.value!r}, message={self.message!r})"


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    kind: ErrorKind
    message: str
    status_code: int | None = None  # HTTP status for REMOTE errors

    @property
    def ok(self) -> bool:
        return False

    @classmethod
    def from_error(cls, error: ActionError) -> Err:
        return cls(kind=error.kind, message=error.message, status_code=error.status_code)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"kind": self.kind.value, "message": self.message}
        if self.status_code is not None:
            out["statusCode"] = self.status_code
        return out


ActionResult = Union[Ok[T], Err]
