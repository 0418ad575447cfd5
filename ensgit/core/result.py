"""Ok/Err result values.

Operations that can fail in an expected way (a config file that does not
parse, a git command that exits non-zero, a group that does not exist)
return one of these instead of raising, so callers decide at the boundary
whether a failure is fatal or only worth a warning.

Usage:
    match registry.modules_for("api"):
        case Ok(modules):
            ...
        case Err(unknown):
            console.error(unknown.message)
"""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["Ok", "Err", "Result"]


@dataclass(frozen=True, slots=True)
class Ok[T]:
    """A successful result carrying ``value``."""

    value: T

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err[E]:
    """A failed result carrying ``error``."""

    error: E

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


type Result[T, E] = Ok[T] | Err[E]
