# core/result.py
import enum
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from app.core.exceptions import CompletionServiceError, TransientStoreError

T = TypeVar("T")


class ErrorKind(str, enum.Enum):
    store = "store"
    completion = "completion"


_ERRORS = {
    ErrorKind.store: TransientStoreError,
    ErrorKind.completion: CompletionServiceError,
}


@dataclass(frozen=True)
class Result(Generic[T]):
    """
    Outcome of a call to an external collaborator (record store or completion service).

    Wrappers never raise on I/O failure; they return ``Result.failure`` and the
    action that made the call decides whether to unwrap, fall back, or report.
    """
    value: Optional[T] = None
    error: Optional[ErrorKind] = None
    message: str = ""

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str) -> "Result[T]":
        return cls(error=kind, message=message)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the value or raise the exception matching the error kind."""
        if self.error is not None:
            raise _ERRORS[self.error](self.message)
        return self.value

    def unwrap_or(self, default: T) -> T:
        return default if self.error is not None else self.value
