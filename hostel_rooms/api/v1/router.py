"""
API v1 Router - Main Entry Point
Aggregates all v1 API endpoints for the hostel room service
"""
from fastapi import APIRouter

from hostel_rooms.api.v1.endpoints import rooms

router = APIRouter(
    responses={
        404: {"description": "Not Found"},
        409: {"description": "Conflict"},
        422: {"description": "Validation Error"},
        500: {"description": "Internal Server Error"}
    }
)

router.include_router(rooms.router)
