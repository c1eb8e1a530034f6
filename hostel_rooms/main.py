from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hostel_rooms.api.v1.router import router as api_v1_router
from hostel_rooms.config.logging import get_logger, setup_logging
from hostel_rooms.config.settings import settings
from hostel_rooms.core.middleware import register_exception_handlers, register_middlewares

logger = get_logger(__name__)


def bootstrap_inventory() -> None:
    """Create tables in development and seed the room inventory once."""
    from hostel_rooms.db.init_db import init_db
    from hostel_rooms.db.session import get_session_factory
    from hostel_rooms.services.room import RoomService

    if not settings.is_production():
        init_db()

    if settings.AUTO_INITIALIZE_ROOMS:
        db = get_session_factory()()
        try:
            RoomService(db, settings).initialize_rooms().unwrap()
        finally:
            db.close()


def create_app() -> FastAPI:
    """
    Application factory for the FastAPI app.

    - Configures title, version, debug mode from Settings.
    - Registers CORS, core middleware, and exception handlers.
    - Includes the versioned API router under /api/v1.
    """
    app = FastAPI(
        title=settings.APP_NAME,
        debug=settings.DEBUG,
        version=settings.API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_middlewares(app)
    register_exception_handlers(app)

    app.include_router(api_v1_router, prefix=settings.API_V1_STR)

    @app.get("/health", tags=["health"])
    def health() -> dict:
        return {"status": "ok", "service": settings.APP_NAME}

    @app.on_event("startup")
    def on_startup() -> None:
        setup_logging(settings)
        bootstrap_inventory()
        logger.info("Hostel room service started")

    return app


app = create_app()
