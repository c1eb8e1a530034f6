# hostel_rooms/db/init_db.py
"""Database initialization utilities."""
from typing import Optional

from sqlalchemy.engine import Engine

from hostel_rooms.config.logging import get_logger
from hostel_rooms.db.session import get_engine
from hostel_rooms.models import Base

logger = get_logger(__name__)


def init_db(engine: Optional[Engine] = None) -> None:
    """
    Create any missing tables.

    Note: This is suitable for development/testing only.
    For production, manage the schema with migrations.
    """
    engine = engine or get_engine()
    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables ensured: %s", ", ".join(sorted(Base.metadata.tables)))
    except Exception as e:
        logger.error(f"Error initializing database: {e}")
        raise


def drop_db(engine: Optional[Engine] = None) -> None:
    """
    Drop all database tables.

    WARNING: This will delete all data! Only for development/testing purposes.
    """
    engine = engine or get_engine()
    Base.metadata.drop_all(bind=engine)
    logger.warning("All database tables dropped")
