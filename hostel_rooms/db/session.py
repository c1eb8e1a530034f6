"""Database session management."""
from functools import lru_cache
from typing import Any, Dict, Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from hostel_rooms.config.settings import settings


def build_engine(database_url: str, echo: bool = False) -> Engine:
    """
    Create an engine for the given URL.

    Pool sizing only applies to server databases; SQLite uses its own
    single-file pool.
    """
    kwargs: Dict[str, Any] = {"pool_pre_ping": True, "echo": echo}
    if database_url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
    else:
        kwargs["pool_size"] = settings.DB_POOL_SIZE
        kwargs["max_overflow"] = settings.DB_POOL_OVERFLOW
        if settings.DB_CONNECT_ARGS:
            kwargs["connect_args"] = settings.DB_CONNECT_ARGS
    return create_engine(database_url, **kwargs)


@lru_cache()
def get_engine() -> Engine:
    """Engine for the configured database, created on first use."""
    return build_engine(settings.get_database_url(), echo=settings.DATABASE_ECHO)


@lru_cache()
def get_session_factory() -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=get_engine())


def get_db() -> Generator[Session, None, None]:
    """
    Dependency function that yields a database session.

    Usage in FastAPI endpoints:
        @router.get("/rooms")
        def list_rooms(db: Session = Depends(get_db)):
            ...
    """
    db = get_session_factory()()
    try:
        yield db
    finally:
        db.close()
