# --- File: hostel_rooms/schemas/room/room_response.py ---
"""
Room response schemas for API and service outputs.
"""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import Field

from hostel_rooms.models.enums import BEDS_PER_ROOM, BedLetter, RoomHold, RoomStatus, Wing
from hostel_rooms.schemas.common.base import BaseSchema, PaginationInfo

__all__ = [
    "BedState",
    "RoomFacilities",
    "RoomResponse",
    "RoomListResponse",
    "AllocationConfirmation",
    "StudentBedResponse",
    "OverallStatistics",
    "WingStatistics",
    "FloorStatistics",
    "RoomStatistics",
]


class BedState(BaseSchema):
    """Occupancy of a single bed slot."""

    is_occupied: bool = Field(default=False)
    student_id: Optional[str] = Field(default=None, description="Occupant reference")
    occupied_since: Optional[datetime] = None


class RoomFacilities(BaseSchema):
    """Facility flags fixed at room creation."""

    has_ac: bool = False
    has_attached_bathroom: bool = True
    has_balcony: bool = False
    has_furniture: bool = True


class RoomResponse(BaseSchema):
    """
    Full room view including bed states and derived occupancy.
    """

    room_number: str = Field(..., description="Room number", examples=["5", "110"])
    floor: int = Field(..., ge=1)
    wing: Wing
    beds: Dict[BedLetter, BedState] = Field(..., description="Bed slot states keyed by letter")
    facilities: RoomFacilities
    status: RoomStatus
    hold: Optional[RoomHold] = None
    rent: float = Field(..., ge=0, description="Monthly rent")
    maintenance_scheduled: Optional[datetime] = None
    hold_reason: Optional[str] = None
    last_maintenance: Optional[datetime] = None
    available_beds: List[BedLetter] = Field(default_factory=list, description="Free bed letters")
    occupied_beds: int = Field(default=0, ge=0, le=BEDS_PER_ROOM, description="Number of occupied beds")

    @classmethod
    def from_room(cls, room) -> "RoomResponse":
        """Build the response from a Room model instance."""
        beds = {
            BedLetter(letter): BedState(
                is_occupied=bed.is_occupied,
                student_id=bed.student_id,
                occupied_since=bed.occupied_since,
            )
            for letter, bed in room.bed_map.items()
        }
        return cls(
            room_number=room.room_number,
            floor=room.floor,
            wing=room.wing,
            beds=beds,
            facilities=RoomFacilities(**room.facilities),
            status=room.status,
            hold=room.hold,
            rent=float(room.rent),
            maintenance_scheduled=room.maintenance_scheduled,
            hold_reason=room.hold_reason,
            last_maintenance=room.last_maintenance,
            available_beds=[BedLetter(letter) for letter in room.available_beds],
            occupied_beds=room.occupancy_count,
        )


class RoomListResponse(BaseSchema):
    """Paginated room listing."""

    rooms: List[RoomResponse]
    pagination: PaginationInfo


class AllocationConfirmation(BaseSchema):
    """Returned after a bed has been assigned."""

    room_number: str
    bed_letter: BedLetter
    floor: int
    wing: Wing
    rent: float
    facilities: RoomFacilities


class StudentBedResponse(BaseSchema):
    """Where a student currently sleeps."""

    student_id: str
    room_number: str
    bed_letter: BedLetter
    floor: int
    wing: Wing
    rent: float
    occupied_since: Optional[datetime] = None


class OverallStatistics(BaseSchema):
    total_rooms: int = 0
    available_rooms: int = 0
    occupied_rooms: int = 0
    maintenance_rooms: int = 0
    occupancy_rate: int = Field(default=0, description="Occupied rooms as a whole percentage")
    total_beds: int = 0
    occupied_beds: int = 0
    available_beds: int = 0
    bed_occupancy_rate: int = Field(default=0, description="Occupied beds as a whole percentage")


class WingStatistics(BaseSchema):
    wing: Wing
    total_rooms: int
    available_rooms: int
    occupied_rooms: int
    average_rent: float


class FloorStatistics(BaseSchema):
    floor: int
    total_rooms: int
    available_rooms: int
    occupied_rooms: int


class RoomStatistics(BaseSchema):
    """Aggregate occupancy snapshot."""

    overall: OverallStatistics
    by_wing: List[WingStatistics] = Field(default_factory=list)
    by_floor: List[FloorStatistics] = Field(default_factory=list)
