"""Tagged results returned by repositories.

Every repository call returns one of:

- ``Ok(value)``: the operation succeeded
- ``NotFound(detail)``: the target row does not exist
- ``StorageError(detail)``: the query itself failed (locked file, constraint
  violation, database unavailable)

so callers can tell "no such row" apart from "the store is broken".
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful repository result."""

    value: T


@dataclass(frozen=True)
class NotFound:
    """The requested row does not exist."""

    detail: str = ""


@dataclass(frozen=True)
class StorageError:
    """The storage layer failed to execute the operation."""

    detail: str


Result = Union[Ok[T], NotFound, StorageError]


def unwrap_or(result: Result[T], default: T) -> T:
    """Return the wrapped value, or ``default`` for NotFound and StorageError."""
    if isinstance(result, Ok):
        return result.value
    return default


def is_ok(result: Result[T]) -> bool:
    return isinstance(result, Ok)
