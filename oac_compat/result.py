"""Tagged results for validation and batch loading."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, order=True)
class Violation:
    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T
    ok: ClassVar[bool] = True


@dataclass(frozen=True)
class Err(Generic[E]):
    error: E
    ok: ClassVar[bool] = False


Result = Union[Ok[T], Err[E]]


def successes(results: list[Result[T, E]]) -> list[T]:
    return [item.value for item in results if isinstance(item, Ok)]


def failures(results: list[Result[T, E]]) -> list[E]:
    return [item.error for item in results if isinstance(item, Err)]
