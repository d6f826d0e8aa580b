"""Result type for explicit error handling.

Every release step returns a Result instead of raising, so the orchestrator
can see exactly which step failed and decide what has to be rolled back.

Usage:
    match parse_and_bump(text, "build"):
        case Ok(change):
            print(f"bumping to {change.version_string}")
        case Err(error):
            print(f"cannot bump: {error.message}")
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")
F = TypeVar("F")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    value: T

    def unwrap(self) -> T:
        return self.value

    def map_err(self, f: Callable[[E], F]) -> Ok[T]:
        return self

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    error: E

    def unwrap(self) -> None:
        """Raise ValueError; callers unwrap only after checking for Err."""
        raise ValueError(f"called unwrap on Err: {self.error}")

    def map_err(self, f: Callable[[E], F]) -> Err[F]:
        """Convert the error, e.g. a PodToolError into a ReleaseError."""
        return Err(f(self.error))

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result: TypeAlias = Union[Ok[T], Err[E]]
