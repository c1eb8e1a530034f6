# hostel_rooms/api/v1/endpoints/rooms.py
"""
Room inventory and bed allocation endpoints.

Authentication and role checks belong to the gateway in front of this
service; handlers only shape requests and unwrap service results,
which re-raises failures for the exception handlers.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from hostel_rooms.api.deps import get_room_service
from hostel_rooms.schemas.common.base import OperationResult
from hostel_rooms.schemas.room import (
    AllocationConfirmation,
    AvailableBedList,
    BedAssignmentRequest,
    BedReleaseRequest,
    BlockRoomRequest,
    InitializeRoomsRequest,
    InitializeRoomsResponse,
    MaintenanceRequest,
    RecommendedRoom,
    RoomListResponse,
    RoomPreferences,
    RoomResponse,
    RoomStatistics,
    StudentBedResponse,
)
from hostel_rooms.services.room import RoomService

router = APIRouter(tags=["rooms"])


@router.get("/rooms", response_model=RoomListResponse)
def list_rooms(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    search: Optional[str] = Query(None, max_length=10),
    service: RoomService = Depends(get_room_service),
) -> RoomListResponse:
    return service.list_rooms(page=page, limit=limit, search=search).unwrap()


@router.post("/rooms/initialize", response_model=InitializeRoomsResponse)
def initialize_rooms(
    payload: Optional[InitializeRoomsRequest] = None,
    service: RoomService = Depends(get_room_service),
) -> InitializeRoomsResponse:
    return service.initialize_rooms(payload.total_rooms if payload else None).unwrap()


@router.get("/rooms/available", response_model=List[RoomResponse])
def get_available_rooms(
    wing: Optional[str] = Query(None, description="Wing letter A-D"),
    floor: Optional[int] = Query(None),
    has_ac: Optional[bool] = Query(None),
    min_price: Optional[float] = Query(None),
    max_price: Optional[float] = Query(None),
    service: RoomService = Depends(get_room_service),
) -> List[RoomResponse]:
    filters = {"wing": wing, "floor": floor, "has_ac": has_ac}
    if min_price is not None or max_price is not None:
        filters["price_range"] = {"min": min_price, "max": max_price}
    return service.get_available_rooms(filters).unwrap()


@router.get("/rooms/available-beds", response_model=AvailableBedList)
def list_available_beds(service: RoomService = Depends(get_room_service)) -> AvailableBedList:
    return service.list_available_beds().unwrap()


@router.get("/rooms/statistics", response_model=RoomStatistics)
def get_room_statistics(service: RoomService = Depends(get_room_service)) -> RoomStatistics:
    return service.get_room_statistics().unwrap()


@router.post("/rooms/recommendations", response_model=List[RecommendedRoom])
def recommend_rooms(
    preferences: Optional[RoomPreferences] = None,
    service: RoomService = Depends(get_room_service),
) -> List[RecommendedRoom]:
    return service.find_optimal_rooms(preferences).unwrap()


@router.get("/rooms/{room_number}", response_model=RoomResponse)
def get_room(room_number: str, service: RoomService = Depends(get_room_service)) -> RoomResponse:
    return service.get_room(room_number).unwrap()


@router.post("/rooms/{room_number}/beds/{bed_letter}/assign", response_model=AllocationConfirmation)
def assign_bed(
    room_number: str,
    bed_letter: str,
    payload: BedAssignmentRequest,
    service: RoomService = Depends(get_room_service),
) -> AllocationConfirmation:
    return service.assign_bed(payload.student_id, room_number, bed_letter).unwrap()


@router.post("/rooms/{room_number}/beds/{bed_letter}/release", response_model=OperationResult)
def release_bed(
    room_number: str,
    bed_letter: str,
    payload: BedReleaseRequest,
    service: RoomService = Depends(get_room_service),
) -> OperationResult:
    return service.release_bed(payload.student_id, room_number, bed_letter).unwrap()


@router.post("/rooms/{room_number}/maintenance", response_model=OperationResult)
def schedule_maintenance(
    room_number: str,
    payload: MaintenanceRequest,
    service: RoomService = Depends(get_room_service),
) -> OperationResult:
    return service.schedule_maintenance(room_number, payload.maintenance_date, payload.reason).unwrap()


@router.post("/rooms/{room_number}/maintenance/complete", response_model=OperationResult)
def complete_maintenance(room_number: str, service: RoomService = Depends(get_room_service)) -> OperationResult:
    return service.complete_maintenance(room_number).unwrap()


@router.post("/rooms/{room_number}/block", response_model=OperationResult)
def block_room(
    room_number: str,
    payload: Optional[BlockRoomRequest] = None,
    service: RoomService = Depends(get_room_service),
) -> OperationResult:
    return service.block_room(room_number, payload.reason if payload else None).unwrap()


@router.post("/rooms/{room_number}/unblock", response_model=OperationResult)
def unblock_room(room_number: str, service: RoomService = Depends(get_room_service)) -> OperationResult:
    return service.unblock_room(room_number).unwrap()


@router.get("/students/{student_id}/bed", response_model=StudentBedResponse)
def get_student_bed(student_id: str, service: RoomService = Depends(get_room_service)) -> StudentBedResponse:
    return service.find_student_bed(student_id).unwrap()
