import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from hostel_rooms.config.settings import Settings, get_settings
from hostel_rooms.db import drop_db, get_db, init_db
from hostel_rooms.main import create_app
from hostel_rooms.services.room import RoomService


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    drop_db(engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def small_config():
    return Settings(TOTAL_ROOMS=10)


@pytest.fixture
def default_config():
    return Settings()


@pytest.fixture
def service(db, small_config):
    room_service = RoomService(db, small_config)
    room_service.initialize_rooms().unwrap()
    return room_service


@pytest.fixture
def full_service(db, default_config):
    room_service = RoomService(db, default_config)
    room_service.initialize_rooms().unwrap()
    return room_service


@pytest.fixture
def client(session_factory, small_config):
    app = create_app()

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: small_config
    return TestClient(app)
