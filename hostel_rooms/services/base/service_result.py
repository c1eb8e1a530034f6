"""
Service result pattern for standardized response handling.

Services return a ServiceResult instead of letting application errors
escape; the API layer unwraps it, which re-raises the failure so the
exception handler can render it.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Generic, Optional, TypeVar

from hostel_rooms.core.exceptions import BaseAppException, ErrorCode


@dataclass
class ServiceError:
    """A failed service operation, with the exception that caused it."""

    code: ErrorCode
    message: str
    cause: BaseAppException
    status_code: int = 500
    details: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_exception(cls, exc: BaseAppException) -> "ServiceError":
        return cls(
            code=exc.error_code,
            message=exc.message,
            status_code=exc.status_code,
            details=dict(exc.details),
            cause=exc,
        )


TData = TypeVar("TData")


@dataclass
class ServiceResult(Generic[TData]):
    """
    Standardized service operation result with success/failure pattern.

    Attributes:
        is_success: Operation success indicator
        data: Result data (if successful)
        error: Error information (if failed)
        message: Human-readable status message
    """

    is_success: bool
    data: Optional[TData] = None
    error: Optional[ServiceError] = None
    message: Optional[str] = None

    @classmethod
    def success(cls, data: Optional[TData] = None, message: Optional[str] = None) -> "ServiceResult[TData]":
        return cls(is_success=True, data=data, message=message)

    @classmethod
    def failure(cls, error: ServiceError) -> "ServiceResult[TData]":
        return cls(is_success=False, error=error, message=error.message)

    def unwrap(self) -> TData:
        """
        Return the data of a successful result.

        Raises:
            BaseAppException: the error that made the operation fail
        """
        if not self.is_success:
            raise self.error.cause
        return self.data

    def __bool__(self) -> bool:
        return self.is_success

    def __repr__(self) -> str:
        status = "Success" if self.is_success else "Failure"
        if self.message:
            return f"ServiceResult({status}: {self.message})"
        return f"ServiceResult({status})"
