"""Summary: Tagged success/failure values returned by client operations.
Why: Make the all-or-nothing outcome of a call explicit in its type."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Literal, NoReturn, TypeAlias, TypeVar, Union

from .errors import ErrorKind, WS2Error

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """A fully decoded result."""

    value: T

    @property
    def ok(self) -> Literal[True]:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True, slots=True)
class Err:
    """Exactly one error describing why the call produced no value."""

    error: WS2Error

    @property
    def ok(self) -> Literal[False]:
        return False

    @property
    def kind(self) -> ErrorKind:
        return self.error.kind

    def unwrap(self) -> NoReturn:
        """Raise the carried error."""

        raise self.error


Result: TypeAlias = Union[Ok[T], Err]


__all__ = ["Err", "Ok", "Result"]
