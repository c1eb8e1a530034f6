"""
Custom Exceptions for the Hostel Room Service

This module defines the exception classes raised by the room service
and rendered by the API layer.
"""

from typing import Any, Dict, List, Optional
from enum import Enum


class ErrorCode(str, Enum):
    """Standard error codes for the application"""
    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"

    # Validation errors
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Database errors
    DATABASE_ERROR = "DATABASE_ERROR"

    # Business logic errors
    ROOM_NOT_FOUND = "ROOM_NOT_FOUND"
    BED_CONFLICT = "BED_CONFLICT"
    ROOM_CONFLICT = "ROOM_CONFLICT"
    STUDENT_ALREADY_ASSIGNED = "STUDENT_ALREADY_ASSIGNED"
    STUDENT_NOT_ASSIGNED = "STUDENT_NOT_ASSIGNED"


class BaseAppException(Exception):
    """
    Base exception class for all application exceptions.

    Provides consistent error handling across the application with
    structured error information.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format"""
        return {
            "error": {
                "message": self.message,
                "code": self.error_code.value,
                "details": self.details,
                "type": self.__class__.__name__
            }
        }

    def __str__(self) -> str:
        return f"{self.error_code.value}: {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message='{self.message}', error_code='{self.error_code.value}')"


class ValidationError(BaseAppException):
    """Exception raised when an argument or filter value is invalid"""

    def __init__(
        self,
        message: str = "Validation failed",
        field_errors: Optional[Dict[str, List[str]]] = None,
        error_code: ErrorCode = ErrorCode.VALIDATION_ERROR,
        status_code: int = 422
    ):
        details = {"field_errors": field_errors} if field_errors else {}
        super().__init__(message, error_code, details, status_code)


class ResourceNotFoundError(BaseAppException):
    """Exception raised when a requested resource is not found"""

    def __init__(
        self,
        resource_type: str = "Resource",
        resource_id: Optional[str] = None,
        message: Optional[str] = None,
        error_code: ErrorCode = ErrorCode.RESOURCE_NOT_FOUND,
    ):
        if not message:
            message = f"{resource_type} not found"
            if resource_id:
                message += f" (ID: {resource_id})"

        details = {
            "resource_type": resource_type,
            "resource_id": resource_id
        }
        super().__init__(message, error_code, details, 404)


class RoomNotFoundError(ResourceNotFoundError):
    """Exception raised when no room carries the requested number"""

    def __init__(self, room_number: str):
        super().__init__(
            resource_type="Room",
            resource_id=str(room_number),
            message=f"Room {room_number} not found",
            error_code=ErrorCode.ROOM_NOT_FOUND,
        )


class ConflictError(BaseAppException):
    """Exception raised when a request conflicts with the current room state"""

    def __init__(
        self,
        message: str = "Request conflicts with current state",
        error_code: ErrorCode = ErrorCode.ROOM_CONFLICT,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, error_code, details, 409)


class DatabaseError(BaseAppException):
    """Exception raised when the database layer fails unexpectedly"""

    def __init__(
        self,
        message: str = "Database operation failed",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, ErrorCode.DATABASE_ERROR, details, 500)


__all__ = [
    "ErrorCode",
    "BaseAppException",
    "ValidationError",
    "ResourceNotFoundError",
    "RoomNotFoundError",
    "ConflictError",
    "DatabaseError",
]
