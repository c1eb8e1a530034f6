"""
Database models for the hostel room service.

Importing this package registers every table with ``Base.metadata``.
"""

from hostel_rooms.models.base import Base, BaseModel, TimestampMixin
from hostel_rooms.models.enums import (
    ALLOCATABLE_STATUSES,
    BEDS_PER_ROOM,
    BedLetter,
    RoomHold,
    RoomStatus,
    Wing,
)
from hostel_rooms.models.room import Bed, Room

__all__ = [
    "Base",
    "BaseModel",
    "TimestampMixin",
    "ALLOCATABLE_STATUSES",
    "BEDS_PER_ROOM",
    "BedLetter",
    "RoomHold",
    "RoomStatus",
    "Wing",
    "Bed",
    "Room",
]
