from hostel_rooms.db.init_db import drop_db, init_db
from hostel_rooms.db.session import build_engine, get_db, get_engine, get_session_factory

__all__ = ["build_engine", "drop_db", "get_db", "get_engine", "get_session_factory", "init_db"]
