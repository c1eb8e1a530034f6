"""
Room schemas package.
"""

from hostel_rooms.schemas.room.room_availability import (
    AvailabilityFilters,
    AvailableBed,
    AvailableBedList,
    PriceRange,
    RecommendedRoom,
    RoomPreferences,
)
from hostel_rooms.schemas.room.room_base import (
    BedAssignmentRequest,
    BedReleaseRequest,
    BlockRoomRequest,
    InitializeRoomsRequest,
    InitializeRoomsResponse,
    MaintenanceRequest,
)
from hostel_rooms.schemas.room.room_response import (
    AllocationConfirmation,
    BedState,
    FloorStatistics,
    OverallStatistics,
    RoomFacilities,
    RoomListResponse,
    RoomResponse,
    RoomStatistics,
    StudentBedResponse,
    WingStatistics,
)

__all__ = [
    "AvailabilityFilters",
    "AvailableBed",
    "AvailableBedList",
    "PriceRange",
    "RecommendedRoom",
    "RoomPreferences",
    "BedAssignmentRequest",
    "BedReleaseRequest",
    "BlockRoomRequest",
    "InitializeRoomsRequest",
    "InitializeRoomsResponse",
    "MaintenanceRequest",
    "AllocationConfirmation",
    "BedState",
    "FloorStatistics",
    "OverallStatistics",
    "RoomFacilities",
    "RoomListResponse",
    "RoomResponse",
    "RoomStatistics",
    "StudentBedResponse",
    "WingStatistics",
]
