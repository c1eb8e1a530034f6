"""
Suitability scoring for room recommendations.
"""

from hostel_rooms.models.enums import BEDS_PER_ROOM
from hostel_rooms.models.room import Room
from hostel_rooms.schemas.room.room_availability import RoomPreferences

WING_MATCH = 20
FLOOR_MATCH = 15
AC_MATCH = 10
BALCONY_BONUS = 5
BATHROOM_BONUS = 5
PRIVACY_PER_FREE_BED = 3
WELL_UNDER_BUDGET = 10
WITHIN_BUDGET = 5
OVER_BUDGET = -5
WELL_UNDER_BUDGET_RATIO = 0.8


def calculate_room_score(room: Room, preferences: RoomPreferences) -> int:
    """
    Score a room against a student's preferences; higher is better.

    Preferences that were not given never add points.
    """
    score = 0

    if preferences.wing is not None and preferences.wing == room.wing:
        score += WING_MATCH
    if preferences.floor is not None and preferences.floor == room.floor:
        score += FLOOR_MATCH
    if preferences.has_ac is not None and preferences.has_ac == room.has_ac:
        score += AC_MATCH

    if room.has_balcony:
        score += BALCONY_BONUS
    if room.has_attached_bathroom:
        score += BATHROOM_BONUS

    # Fewer room-mates, more privacy
    score += (BEDS_PER_ROOM - room.occupancy_count) * PRIVACY_PER_FREE_BED

    if preferences.budget is not None:
        rent = float(room.rent)
        if rent <= preferences.budget * WELL_UNDER_BUDGET_RATIO:
            score += WELL_UNDER_BUDGET
        elif rent <= preferences.budget:
            score += WITHIN_BUDGET
        else:
            score += OVER_BUDGET

    return score
