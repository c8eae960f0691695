"""Success/failure return values used between repositories, services and routes."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from .errors import AppError

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Err:
    error: AppError

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self):
        raise self.error


Result = Union[Ok[T], Err]
