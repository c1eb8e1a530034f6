"""
Enumerations shared by the room models, schemas and services.
"""

import enum
from typing import List


class RoomStatus(str, enum.Enum):
    """Room availability status."""
    AVAILABLE = "AVAILABLE"
    OCCUPIED = "OCCUPIED"
    MAINTENANCE = "MAINTENANCE"
    BLOCKED = "BLOCKED"


class RoomHold(str, enum.Enum):
    """Administrative override that masks the occupancy-derived status."""
    MAINTENANCE = "MAINTENANCE"
    BLOCKED = "BLOCKED"


class Wing(str, enum.Enum):
    """Hostel wing, assigned from the room number range."""
    A = "A"
    B = "B"
    C = "C"
    D = "D"


class BedLetter(str, enum.Enum):
    """Bed slot label; every room has exactly these four slots."""
    A = "A"
    B = "B"
    C = "C"
    D = "D"

    @classmethod
    def letters(cls) -> List[str]:
        return [member.value for member in cls]


BEDS_PER_ROOM = len(BedLetter)

# Statuses a room can be allocated from
ALLOCATABLE_STATUSES = (RoomStatus.AVAILABLE, RoomStatus.OCCUPIED)


def enum_values(enum_cls) -> List[str]:
    """values_callable for SQLAlchemy Enum columns."""
    return [member.value for member in enum_cls]
