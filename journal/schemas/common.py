"""Common schema utilities and base classes."""

import enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict


class BaseSchema(BaseModel):
    """Base schema with common configuration."""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class ErrorKind(str, enum.Enum):
    """Why a store operation failed."""

    NOT_FOUND = "not_found"
    CONSTRAINT_VIOLATION = "constraint_violation"
    ALREADY_EXISTS = "already_exists"
    IO_FAILURE = "io_failure"


class ErrorDetail(BaseSchema):
    """Error detail structure."""

    kind: ErrorKind
    message: str
    details: dict[str, Any] = {}


T = TypeVar("T")

# Identity reported for inserts that did not happen
FAILED_IDENTITY = -1


class OperationResult(BaseSchema, Generic[T]):
    """Outcome of a store operation: a value on success, an error otherwise.

    Truthiness follows ``success`` so callers can write ``if store.groups.update(g):``.
    """

    success: bool
    value: T | None = None
    error: ErrorDetail | None = None

    @classmethod
    def ok(cls, value: Any = None) -> "OperationResult":
        return cls(success=True, value=value)

    @classmethod
    def fail(
        cls,
        kind: ErrorKind,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> "OperationResult":
        return cls(
            success=False,
            error=ErrorDetail(kind=kind, message=message, details=details or {}),
        )

    def __bool__(self) -> bool:
        return self.success

    @property
    def identity(self) -> int:
        """Inserted id, or -1 when the insert failed."""
        if self.success and isinstance(self.value, int) and not isinstance(self.value, bool):
            return self.value
        return FAILED_IDENTITY

    @property
    def error_kind(self) -> ErrorKind | None:
        return self.error.kind if self.error else None
