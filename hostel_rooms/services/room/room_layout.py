"""
Deterministic room layout used when the inventory is first created.
"""

import math
from decimal import Decimal
from typing import Any, Dict

from hostel_rooms.config.settings import Settings
from hostel_rooms.models.enums import BedLetter, RoomStatus, Wing
from hostel_rooms.models.room import Bed, Room

WINGS = list(Wing)


def floor_for(room_number: int, config: Settings) -> int:
    return math.ceil(room_number / config.ROOMS_PER_FLOOR)


def wing_for(room_number: int, config: Settings) -> Wing:
    """Consecutive runs of ROOMS_PER_WING rooms; overflow stays in the last wing."""
    index = (room_number - 1) // config.ROOMS_PER_WING
    return WINGS[min(index, len(WINGS) - 1)]


def room_layout(room_number: int, config: Settings) -> Dict[str, Any]:
    """
    Column values for a freshly created room.

    Args:
        room_number: 1-based room number
        config: Settings carrying the layout knobs

    Returns:
        Dict of Room column values
    """
    floor = floor_for(room_number, config)
    has_ac = room_number % config.AC_ROOM_INTERVAL == 0
    return {
        "room_number": str(room_number),
        "floor": floor,
        "wing": wing_for(room_number, config),
        "has_ac": has_ac,
        "has_attached_bathroom": True,
        "has_balcony": floor >= config.BALCONY_MIN_FLOOR,
        "has_furniture": True,
        "status": RoomStatus.AVAILABLE,
        "rent": Decimal(config.AC_ROOM_RENT if has_ac else config.STANDARD_ROOM_RENT),
    }


def build_room(room_number: int, config: Settings) -> Room:
    """Room instance with its four empty beds."""
    room = Room(**room_layout(room_number, config))
    room.beds = [Bed(bed_letter=letter, is_occupied=False) for letter in BedLetter]
    return room
