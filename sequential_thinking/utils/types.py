"""
Result types for the sequential thinking engine.

Expected failures (bad caller input) travel back as a Failure value instead
of an exception, so the engine boundary never unwinds for them.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar, Union

T = TypeVar("T")


class ErrorCategory(str, Enum):
    """Failure categories reported by the engine."""

    VALIDATION = "validation"
    PROCESSING = "processing"


@dataclass(frozen=True)
class Success(Generic[T]):
    """Successful outcome carrying a value."""

    value: T

    @property
    def is_success(self) -> bool:
        return True

    @property
    def is_failure(self) -> bool:
        return False


@dataclass(frozen=True)
class Failure:
    """
    Failed outcome carrying a human-readable message.

    Attributes:
        error: Message identifying which precondition failed, or the
               wrapped cause of an unexpected fault
        category: Whether the caller can fix this by resubmitting
    """

    error: str
    category: ErrorCategory = ErrorCategory.VALIDATION

    @property
    def is_success(self) -> bool:
        return False

    @property
    def is_failure(self) -> bool:
        return True


Result = Union[Success[Any], Failure]
