# hostel_rooms/api/deps.py
"""
Shared FastAPI dependencies.

Example usage in a router:
    @router.get("/rooms/statistics")
    def stats(service: RoomService = Depends(deps.get_room_service)):
        return service.get_room_statistics()
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from hostel_rooms.config.settings import Settings, get_settings
from hostel_rooms.db.session import get_db
from hostel_rooms.services.room import RoomService

__all__ = ["get_db", "get_room_service"]


def get_room_service(
    db: Session = Depends(get_db),
    config: Settings = Depends(get_settings),
) -> RoomService:
    """RoomService bound to the request's database session."""
    return RoomService(db, config)
