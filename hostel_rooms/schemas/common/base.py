# --- File: hostel_rooms/schemas/common/base.py ---
"""
Base schema classes with common configuration.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

__all__ = [
    "BaseSchema",
    "OperationResult",
    "PaginationInfo",
]


class BaseSchema(BaseModel):
    """
    Base schema with common Pydantic configuration.

    All application-facing schemas inherit from this to ensure
    consistent behaviour.
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        use_enum_values=False,
        str_strip_whitespace=True,
        validate_assignment=True,
    )


class OperationResult(BaseSchema):
    """Outcome of a mutation that has no richer payload."""

    success: bool = Field(default=True, description="Whether the operation succeeded")
    message: str = Field(..., description="Human-readable outcome")


class PaginationInfo(BaseSchema):
    """Page position within a listing."""

    current: int = Field(..., ge=1, description="Current page (1-based)")
    pages: int = Field(..., ge=0, description="Total number of pages")
    total: int = Field(..., ge=0, description="Total number of matching items")
