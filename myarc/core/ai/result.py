"""Outcome wrapper for calls into AI and memory vendors."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")

STATUS_OK = "ok"
STATUS_UNAVAILABLE = "unavailable"
STATUS_ERROR = "error"


@dataclass(frozen=True)
class AIResult(Generic[T]):
    """Result of an enrichment call.

    ``unavailable`` means the vendor is not configured or produced nothing
    usable; ``error`` carries a short detail for logs. Neither is raised.
    """

    status: str
    value: Optional[T] = None
    detail: Optional[str] = None

    @classmethod
    def ok(cls, value: T) -> "AIResult[T]":
        return cls(status=STATUS_OK, value=value)

    @classmethod
    def unavailable(cls, detail: Optional[str] = None) -> "AIResult[T]":
        return cls(status=STATUS_UNAVAILABLE, detail=detail)

    @classmethod
    def error(cls, detail: str) -> "AIResult[T]":
        return cls(status=STATUS_ERROR, detail=detail)

    @property
    def is_ok(self) -> bool:
        return self.status == STATUS_OK

    def value_or(self, default: T) -> T:
        return self.value if self.is_ok and self.value is not None else default
