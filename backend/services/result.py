"""
result.py — Explicit outcome of a store read
Separates "empty because there is no data" from "empty because storage failed".
"""

from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class StoreResult(Generic[T]):
    value: T
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: Any) -> "StoreResult":
        return cls(value=value)

    @classmethod
    def failure(cls, default: Any, error: Exception | str) -> "StoreResult":
        return cls(value=default, error=str(error))
