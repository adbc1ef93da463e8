"""Result primitives for value-based error handling.

Endpoint methods return these instead of raising, so callers can match on
success or failure without wrapping every call in try/except.
"""

from __future__ import annotations

import dataclasses
import typing

TSuccess = typing.TypeVar("TSuccess")
TFailure = typing.TypeVar("TFailure", bound=Exception)


@dataclasses.dataclass(frozen=True, slots=True)
class Success[TSuccess]:
    """A successful result."""

    value: TSuccess

    @property
    def is_success(self) -> bool:
        return True

    def unwrap(self) -> TSuccess:
        """Return the wrapped value."""
        return self.value


@dataclasses.dataclass(frozen=True, slots=True)
class Failure[TFailure]:
    """A failed result, containing the error."""

    error: TFailure

    @property
    def is_success(self) -> bool:
        return False

    def unwrap(self) -> typing.NoReturn:
        """Raise the wrapped error."""
        raise self.error  # type: ignore[misc]


Result = Success[TSuccess] | Failure[TFailure]
