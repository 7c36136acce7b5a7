"""Explicit success/failure values for recovered errors."""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome carrying a value."""

    value: T


@dataclass(frozen=True)
class Err:
    """Failed outcome that was recovered instead of propagated."""

    reason: str
    error: BaseException | None = None


Result = Union[Ok[T], Err]
