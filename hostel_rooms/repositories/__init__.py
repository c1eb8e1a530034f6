from hostel_rooms.repositories.base_repository import BaseRepository
from hostel_rooms.repositories.room import RoomRepository

__all__ = ["BaseRepository", "RoomRepository"]
