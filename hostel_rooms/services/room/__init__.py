from hostel_rooms.services.room.room_layout import build_room, room_layout
from hostel_rooms.services.room.room_scoring import calculate_room_score
from hostel_rooms.services.room.room_service import RoomService, percentage

__all__ = ["RoomService", "build_room", "calculate_room_score", "percentage", "room_layout"]
