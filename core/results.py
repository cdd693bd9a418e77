"""
Core — Operation Results

Ledger primitives and document workflows report ordinary business
outcomes (insufficient stock, bad state, missing partner) as values.
Only persistence failures are raised.

    result = ledger.decrease(...)
    if not result.ok:
        transaction.set_rollback(True)
        return result

@file core/results.py
"""

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from core.exceptions import StockbookError

T = TypeVar('T')


@dataclass(frozen=True)
class Result(Generic[T]):
    value: T | None = None
    error: StockbookError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: Any = None) -> 'Result':
        return cls(value=value)

    @classmethod
    def failure(cls, error: StockbookError) -> 'Result':
        return cls(error=error)

    def unwrap(self) -> T:
        """Return the value or raise the carried error."""
        if self.error is not None:
            raise self.error
        return self.value

    def __bool__(self) -> bool:
        return self.ok
