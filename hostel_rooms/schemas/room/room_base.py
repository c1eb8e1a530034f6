# --- File: hostel_rooms/schemas/room/room_base.py ---
"""
Request schemas for room allocation and administration.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field

from hostel_rooms.schemas.common.base import BaseSchema

__all__ = [
    "BedAssignmentRequest",
    "BedReleaseRequest",
    "MaintenanceRequest",
    "BlockRoomRequest",
    "InitializeRoomsRequest",
    "InitializeRoomsResponse",
]


class BedAssignmentRequest(BaseSchema):
    """Bind a student to the bed named in the URL."""

    student_id: str = Field(..., min_length=1, max_length=64, description="Student reference")


class BedReleaseRequest(BaseSchema):
    """Free the bed named in the URL; the student must be its occupant."""

    student_id: str = Field(..., min_length=1, max_length=64, description="Student reference")


class MaintenanceRequest(BaseSchema):
    maintenance_date: datetime = Field(..., description="When the maintenance is scheduled")
    reason: Optional[str] = Field(default=None, max_length=1000)


class BlockRoomRequest(BaseSchema):
    reason: Optional[str] = Field(default=None, max_length=1000)


class InitializeRoomsRequest(BaseSchema):
    total_rooms: Optional[int] = Field(
        default=None,
        ge=1,
        le=9999,
        description="Override the configured room count",
    )


class InitializeRoomsResponse(BaseSchema):
    created: int = Field(..., ge=0, description="Rooms inserted by this call (0 if already initialized)")
    total_rooms: int = Field(..., ge=0)
