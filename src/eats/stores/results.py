"""Explicit success/failure values returned by every store operation."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class ErrorKind(str, Enum):
    """Failure taxonomy shared by the account and restaurant stores."""

    NOT_FOUND = "not_found"
    FORBIDDEN = "forbidden"
    ALREADY_EXISTS = "already_exists"
    INVALID_CREDENTIALS = "invalid_credentials"
    PERSISTENCE_ERROR = "persistence_error"


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of a store operation.

    Exactly one of ``value`` (on success) or ``error`` (on failure) is meaningful.
    ``message`` is the human-readable text surfaced as ``err`` in GraphQL envelopes.
    """

    value: T | None = None
    error: ErrorKind | None = None
    message: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T | None = None) -> Result[T]:
        return cls(value=value)

    @classmethod
    def failure(cls, error: ErrorKind, message: str) -> Result[T]:
        return cls(error=error, message=message)
