"""Result type for explicit error handling.

Adapters at the edge of the draft core (catalog loading, snapshot restore)
return a Result instead of raising so a failed read never aborts a draft
session; the caller decides whether to warn and continue with defaults.

Usage:
    result = load_catalog(path)
    if result.is_ok():
        catalog = result.unwrap()
    else:
        warn(result.unwrap_err())
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeVar, cast, final

if TYPE_CHECKING:
    from collections.abc import Callable

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E", bound=Exception)


class UnwrapError(Exception):
    """Raised when unwrap() is called on an Err or unwrap_err() on an Ok."""


@final
@dataclass(frozen=True, slots=True)
class Ok[T]:
    """A successful result."""

    _value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self._value

    def unwrap_or(self, default: T) -> T:
        return self._value

    def unwrap_err(self) -> Exception:
        raise UnwrapError("Called unwrap_err on Ok value")

    def map(self, fn: Callable[[T], U]) -> Result[U, E]:
        """Return Ok(fn(value))."""
        return Ok(fn(self._value))


@final
@dataclass(frozen=True, slots=True)
class Err[E: Exception]:
    """A failed result carrying the error."""

    _error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap[_T](self) -> _T:  # noqa: UP049 # pyright: ignore[reportInvalidTypeVarUse]
        raise UnwrapError(f"Called unwrap on Err value: {self._error}")

    def unwrap_or[_T](self, default: _T) -> _T:  # noqa: UP049
        return default

    def unwrap_err(self) -> E:
        return self._error

    def map[_T, _U](  # noqa: UP049
        self, fn: Callable[[_T], _U]  # pyright: ignore[reportInvalidTypeVarUse]
    ) -> Result[_U, E]:
        """Return self unchanged."""
        return cast("Result[_U, E]", self)


Result = Ok[T] | Err[E]
