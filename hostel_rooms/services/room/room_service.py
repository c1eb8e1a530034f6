"""
Room service: inventory initialization, bed allocation, availability,
statistics, recommendations and maintenance holds.

Operations report their outcome as a ServiceResult. Every bed
mutation runs in one transaction that locks the room row and
updates the bed with a compare-and-set, so two requests for the same
bed can never both succeed.
"""

import math
from datetime import date, datetime, time, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, List, Optional, Type, TypeVar, Union

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from hostel_rooms.config.settings import Settings, settings as default_settings
from hostel_rooms.core.exceptions import (
    BaseAppException,
    ConflictError,
    ErrorCode,
    ResourceNotFoundError,
    RoomNotFoundError,
    ValidationError,
)
from hostel_rooms.models.enums import ALLOCATABLE_STATUSES, BedLetter, RoomHold, RoomStatus
from hostel_rooms.models.room import Room
from hostel_rooms.repositories.room import RoomRepository
from hostel_rooms.schemas.common.base import BaseSchema, OperationResult, PaginationInfo
from hostel_rooms.schemas.room import (
    AllocationConfirmation,
    AvailabilityFilters,
    AvailableBed,
    AvailableBedList,
    FloorStatistics,
    InitializeRoomsResponse,
    OverallStatistics,
    RecommendedRoom,
    RoomFacilities,
    RoomListResponse,
    RoomPreferences,
    RoomResponse,
    RoomStatistics,
    StudentBedResponse,
    WingStatistics,
)
from hostel_rooms.services.base import BaseService, ServiceResult
from hostel_rooms.services.room.room_layout import build_room
from hostel_rooms.services.room.room_scoring import calculate_room_score

TSchema = TypeVar("TSchema", bound=BaseSchema)

MAX_PAGE_SIZE = 100


def percentage(part: int, whole: int) -> int:
    """Whole percentage rounded half up; 0 when there is nothing to divide."""
    if whole <= 0:
        return 0
    value = Decimal(part) * 100 / Decimal(whole)
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class RoomService(BaseService[RoomRepository]):
    """
    Owns the room inventory and is the only writer of bed state.
    """

    def __init__(self, db_session: Session, config: Optional[Settings] = None):
        super().__init__(RoomRepository(db_session), db_session)
        self.config = config or default_settings

    # -------------------------------------------------------------------------
    # Input parsing
    # -------------------------------------------------------------------------

    @staticmethod
    def _parse_bed_letter(bed_letter: Union[str, BedLetter]) -> BedLetter:
        try:
            return BedLetter(bed_letter)
        except ValueError:
            raise ValidationError(
                "Invalid bed letter. Must be A, B, C, or D",
                field_errors={"bed_letter": [f"'{bed_letter}' is not a valid bed letter"]},
            )

    @staticmethod
    def _parse_schema(schema: Type[TSchema], data: Union[TSchema, Dict[str, Any], None]) -> TSchema:
        """Validate caller input, reporting failures as ValidationError."""
        if isinstance(data, schema):
            return data
        try:
            return schema.model_validate(data or {})
        except PydanticValidationError as e:
            field_errors: Dict[str, List[str]] = {}
            for error in e.errors():
                field = ".".join(str(part) for part in error["loc"]) or "__root__"
                field_errors.setdefault(field, []).append(error["msg"])
            raise ValidationError(f"Invalid {schema.__name__}", field_errors=field_errors) from e

    @staticmethod
    def _parse_timestamp(value: Union[datetime, date, str]) -> datetime:
        if isinstance(value, datetime):
            return value
        if isinstance(value, date):
            return datetime.combine(value, time.min)
        try:
            return datetime.fromisoformat(str(value))
        except ValueError:
            raise ValidationError(
                "Invalid maintenance date",
                field_errors={"maintenance_date": [f"'{value}' is not an ISO 8601 date"]},
            )

    def _get_room_or_raise(self, room_number: str, lock: bool = False) -> Room:
        room = self.repository.find_by_room_number(str(room_number), lock=lock)
        if room is None:
            raise RoomNotFoundError(str(room_number))
        return room

    # -------------------------------------------------------------------------
    # Initialization
    # -------------------------------------------------------------------------


    def initialize_rooms(self, total_rooms: Optional[int] = None) -> ServiceResult[InitializeRoomsResponse]:
        """
        Create the full room inventory once.

        Args:
            total_rooms: Number of rooms to create (defaults to TOTAL_ROOMS)

        Returns:
            ServiceResult with the number of rooms created (0 when rooms
            already exist, including when a concurrent initializer won)
        """
        total = total_rooms if total_rooms is not None else self.config.TOTAL_ROOMS
        try:
            if total < 1:
                raise ValidationError(
                    "Total rooms must be at least 1",
                    field_errors={"total_rooms": ["must be >= 1"]},
                )

            existing = self.repository.count()
            if existing > 0:
                self._logger.info(f"Rooms already initialized ({existing} rooms found)")
                return ServiceResult.success(
                    InitializeRoomsResponse(created=0, total_rooms=existing),
                    message="Rooms already initialized",
                )

            with self.transaction("initialize rooms"):
                rooms = [build_room(number, self.config) for number in range(1, total + 1)]
                ac_rooms = sum(1 for room in rooms if room.has_ac)
                try:
                    self.repository.add_all(rooms)
                except IntegrityError as e:
                    raise ConflictError("Room inventory was initialized concurrently") from e
        except ConflictError:
            existing = self.repository.count()
            self._logger.info(f"Rooms initialized by another request ({existing} rooms found)")
            return ServiceResult.success(
                InitializeRoomsResponse(created=0, total_rooms=existing),
                message="Rooms already initialized",
            )
        except BaseAppException as e:
            return self._handle_exception(e, "initialize rooms")

        self._logger.info(
            f"Initialized {total} rooms ({ac_rooms} AC, {total - ac_rooms} standard)",
            extra={"total_rooms": total},
        )
        return ServiceResult.success(
            InitializeRoomsResponse(created=total, total_rooms=total),
            message="Rooms initialized",
        )

    # -------------------------------------------------------------------------
    # Allocation
    # -------------------------------------------------------------------------

    def assign_bed(self, student_id: str, room_number: str, bed_letter: str) -> ServiceResult[AllocationConfirmation]:
        """
        Assign a specific bed to a student.

        Failures:
            ValidationError: bed letter is not A-D
            RoomNotFoundError: no such room
            ConflictError: bed already occupied, or the student already
                holds a bed elsewhere
        """
        log_extra = {"room_number": str(room_number), "bed_letter": str(bed_letter), "student_id": str(student_id)}
        try:
            letter = self._parse_bed_letter(bed_letter)
            with self.transaction("assign bed"):
                room = self._get_room_or_raise(room_number, lock=True)

                current = self.repository.find_bed_by_student(student_id)
                if current is not None:
                    raise ConflictError(
                        f"Student {student_id} already occupies room {current.room.room_number} "
                        f"bed {current.bed_letter.value}",
                        error_code=ErrorCode.STUDENT_ALREADY_ASSIGNED,
                        details={
                            "room_number": current.room.room_number,
                            "bed_letter": current.bed_letter.value,
                        },
                    )

                try:
                    occupied = self.repository.occupy_bed(
                        room.id, letter, student_id, datetime.now(timezone.utc)
                    )
                except IntegrityError as e:
                    # Another transaction placed this student first
                    raise ConflictError(
                        f"Student {student_id} already occupies a bed",
                        error_code=ErrorCode.STUDENT_ALREADY_ASSIGNED,
                    ) from e

                if not occupied:
                    raise ConflictError(
                        f"Bed {letter.value} in room {room.room_number} is already occupied",
                        error_code=ErrorCode.BED_CONFLICT,
                        details={"room_number": room.room_number, "bed_letter": letter.value},
                    )

                if room.hold is not None:
                    self._logger.warning(f"Assigning bed in a room on {room.hold.value} hold", extra=log_extra)
                room.refresh_status(self.repository.count_occupied_beds(room.id))

                confirmation = AllocationConfirmation(
                    room_number=room.room_number,
                    bed_letter=letter,
                    floor=room.floor,
                    wing=room.wing,
                    rent=float(room.rent),
                    facilities=RoomFacilities(**room.facilities),
                )
        except BaseAppException as e:
            return self._handle_exception(e, "assign bed")

        self._logger.info("Bed assigned", extra=log_extra)
        return ServiceResult.success(confirmation, message="Bed assigned")

    def release_bed(self, student_id: str, room_number: str, bed_letter: str) -> ServiceResult[OperationResult]:
        """
        Release a bed held by a student.

        Failures:
            ValidationError: bed letter is not A-D
            RoomNotFoundError: no such room
            ConflictError: bed is free or held by another student
        """
        log_extra = {"room_number": str(room_number), "bed_letter": str(bed_letter), "student_id": str(student_id)}
        try:
            letter = self._parse_bed_letter(bed_letter)
            with self.transaction("release bed"):
                room = self._get_room_or_raise(room_number, lock=True)

                if not self.repository.vacate_bed(room.id, letter, student_id):
                    raise ConflictError(
                        "Bed assignment mismatch",
                        error_code=ErrorCode.BED_CONFLICT,
                        details={"room_number": room.room_number, "bed_letter": letter.value},
                    )

                room.refresh_status(self.repository.count_occupied_beds(room.id))
        except BaseAppException as e:
            return self._handle_exception(e, "release bed")

        self._logger.info("Bed released", extra=log_extra)
        message = "Room released successfully"
        return ServiceResult.success(OperationResult(success=True, message=message), message=message)

    def find_student_bed(self, student_id: str) -> ServiceResult[StudentBedResponse]:
        """Room and bed currently held by a student."""
        bed = self.repository.find_bed_by_student(student_id)
        if bed is None:
            return self._handle_exception(
                ResourceNotFoundError(
                    resource_type="Bed assignment",
                    resource_id=str(student_id),
                    message=f"Student {student_id} has no bed assigned",
                    error_code=ErrorCode.STUDENT_NOT_ASSIGNED,
                ),
                "find student bed",
            )
        room = bed.room
        return ServiceResult.success(
            StudentBedResponse(
                student_id=bed.student_id,
                room_number=room.room_number,
                bed_letter=bed.bed_letter,
                floor=room.floor,
                wing=room.wing,
                rent=float(room.rent),
                occupied_since=bed.occupied_since,
            )
        )

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get_room(self, room_number: str) -> ServiceResult[RoomResponse]:
        try:
            room = self._get_room_or_raise(room_number)
        except BaseAppException as e:
            return self._handle_exception(e, "get room")
        return ServiceResult.success(RoomResponse.from_room(room))

    def list_rooms(
        self, page: int = 1, limit: int = 10, search: Optional[str] = None
    ) -> ServiceResult[RoomListResponse]:
        """Paginated room listing ordered by room number."""
        if page < 1:
            return self._handle_exception(
                ValidationError("Page must be at least 1", field_errors={"page": ["must be >= 1"]}),
                "list rooms",
            )
        if not 1 <= limit <= MAX_PAGE_SIZE:
            return self._handle_exception(
                ValidationError(
                    f"Limit must be between 1 and {MAX_PAGE_SIZE}",
                    field_errors={"limit": [f"must be between 1 and {MAX_PAGE_SIZE}"]},
                ),
                "list rooms",
            )

        rooms, total = self.repository.search_rooms(search, offset=(page - 1) * limit, limit=limit)
        return ServiceResult.success(
            RoomListResponse(
                rooms=[RoomResponse.from_room(room) for room in rooms],
                pagination=PaginationInfo(current=page, pages=math.ceil(total / limit), total=total),
            )
        )

    def get_available_rooms(
        self, filters: Union[AvailabilityFilters, Dict[str, Any], None] = None
    ) -> ServiceResult[List[RoomResponse]]:
        """
        Allocatable rooms with at least one free bed.

        Rooms under a hold are excluded. Each result lists its free beds
        and the number of occupied beds.
        """
        try:
            filters = self._parse_schema(AvailabilityFilters, filters)
        except BaseAppException as e:
            return self._handle_exception(e, "get available rooms")

        min_rent = max_rent = None
        if filters.price_range is not None:
            min_rent = Decimal(str(filters.price_range.min if filters.price_range.min is not None else 0))
            max_rent = Decimal(
                str(
                    filters.price_range.max
                    if filters.price_range.max is not None
                    else self.config.DEFAULT_MAX_PRICE
                )
            )

        rooms = self.repository.find_rooms(
            statuses=ALLOCATABLE_STATUSES,
            wing=filters.wing,
            floor=filters.floor,
            has_ac=filters.has_ac,
            min_rent=min_rent,
            max_rent=max_rent,
        )
        return ServiceResult.success([RoomResponse.from_room(room) for room in rooms if room.available_beds])

    def list_available_beds(self) -> ServiceResult[AvailableBedList]:
        """Every free bed in allocatable rooms, labelled for selection."""
        beds = [
            AvailableBed(
                room_number=room.room_number,
                bed_letter=BedLetter(letter),
                label=f"Room {room.room_number} - Bed {letter}",
                floor=room.floor,
                wing=room.wing,
                rent=float(room.rent),
            )
            for room in self.repository.find_rooms(statuses=ALLOCATABLE_STATUSES)
            for letter in room.available_beds
        ]
        return ServiceResult.success(AvailableBedList(available_beds=beds, total=len(beds)))

    def get_room_statistics(self) -> ServiceResult[RoomStatistics]:
        """Aggregate occupancy snapshot, overall and per wing/floor."""
        by_status = self.repository.count_by_status()
        total_rooms = sum(by_status.values())
        occupied_rooms = by_status[RoomStatus.OCCUPIED]
        total_beds, occupied_beds = self.repository.bed_totals()

        overall = OverallStatistics(
            total_rooms=total_rooms,
            available_rooms=by_status[RoomStatus.AVAILABLE],
            occupied_rooms=occupied_rooms,
            maintenance_rooms=by_status[RoomStatus.MAINTENANCE],
            occupancy_rate=percentage(occupied_rooms, total_rooms),
            total_beds=total_beds,
            occupied_beds=occupied_beds,
            available_beds=total_beds - occupied_beds,
            bed_occupancy_rate=percentage(occupied_beds, total_beds),
        )
        return ServiceResult.success(
            RoomStatistics(
                overall=overall,
                by_wing=[WingStatistics(**row) for row in self.repository.wing_breakdown()],
                by_floor=[FloorStatistics(**row) for row in self.repository.floor_breakdown()],
            )
        )

    def find_optimal_rooms(
        self, preferences: Union[RoomPreferences, Dict[str, Any], None] = None
    ) -> ServiceResult[List[RecommendedRoom]]:
        """
        Best matching rooms for a student, highest score first.

        Given preferences also act as hard filters. Rooms with equal
        scores keep ascending room-number order.
        """
        try:
            preferences = self._parse_schema(RoomPreferences, preferences)
        except BaseAppException as e:
            return self._handle_exception(e, "find optimal rooms")

        rooms = self.repository.find_rooms(
            statuses=ALLOCATABLE_STATUSES,
            wing=preferences.wing,
            floor=preferences.floor,
            has_ac=preferences.has_ac,
            max_rent=Decimal(str(preferences.budget)) if preferences.budget is not None else None,
        )

        candidates = [
            RecommendedRoom(
                room=RoomResponse.from_room(room),
                available_beds=[BedLetter(letter) for letter in room.available_beds],
                occupancy=room.occupancy_count,
                score=calculate_room_score(room, preferences),
            )
            for room in rooms
            if room.available_beds
        ]
        # sorted() is stable, ties stay in room-number order
        ranked = sorted(candidates, key=lambda candidate: candidate.score, reverse=True)
        return ServiceResult.success(ranked[: self.config.RECOMMENDATION_LIMIT])

    # -------------------------------------------------------------------------
    # Maintenance and blocking
    # -------------------------------------------------------------------------

    def schedule_maintenance(
        self,
        room_number: str,
        maintenance_date: Union[datetime, date, str],
        reason: Optional[str] = None,
    ) -> ServiceResult[OperationResult]:
        """Put a room on maintenance hold regardless of its occupancy."""
        try:
            scheduled = self._parse_timestamp(maintenance_date)
            with self.transaction("schedule maintenance"):
                room = self._get_room_or_raise(room_number, lock=True)
                room.hold = RoomHold.MAINTENANCE
                room.maintenance_scheduled = scheduled
                room.hold_reason = reason
                room.refresh_status(self.repository.count_occupied_beds(room.id))
        except BaseAppException as e:
            return self._handle_exception(e, "schedule maintenance")

        self._logger.info(
            f"Maintenance scheduled for {scheduled.isoformat()}",
            extra={"room_number": str(room_number)},
        )
        return self._done("Room maintenance scheduled")

    def complete_maintenance(self, room_number: str) -> ServiceResult[OperationResult]:
        """Lift a maintenance hold and restore the occupancy-derived status."""
        try:
            with self.transaction("complete maintenance"):
                room = self._get_room_or_raise(room_number, lock=True)
                if room.hold != RoomHold.MAINTENANCE:
                    raise ConflictError(f"Room {room.room_number} is not under maintenance")
                room.hold = None
                room.last_maintenance = datetime.now(timezone.utc)
                room.maintenance_scheduled = None
                room.hold_reason = None
                room.refresh_status(self.repository.count_occupied_beds(room.id))
        except BaseAppException as e:
            return self._handle_exception(e, "complete maintenance")

        self._logger.info("Maintenance completed", extra={"room_number": str(room_number)})
        return self._done("Room maintenance completed")

    def block_room(self, room_number: str, reason: Optional[str] = None) -> ServiceResult[OperationResult]:
        """Take a room out of allocation without touching its beds."""
        try:
            with self.transaction("block room"):
                room = self._get_room_or_raise(room_number, lock=True)
                if room.hold == RoomHold.MAINTENANCE:
                    raise ConflictError(f"Room {room.room_number} is under maintenance")
                room.hold = RoomHold.BLOCKED
                room.hold_reason = reason
                room.refresh_status(self.repository.count_occupied_beds(room.id))
        except BaseAppException as e:
            return self._handle_exception(e, "block room")

        self._logger.info(f"Room blocked: {reason or 'no reason given'}", extra={"room_number": str(room_number)})
        return self._done("Room blocked")

    def unblock_room(self, room_number: str) -> ServiceResult[OperationResult]:
        try:
            with self.transaction("unblock room"):
                room = self._get_room_or_raise(room_number, lock=True)
                if room.hold != RoomHold.BLOCKED:
                    raise ConflictError(f"Room {room.room_number} is not blocked")
                room.hold = None
                room.hold_reason = None
                room.refresh_status(self.repository.count_occupied_beds(room.id))
        except BaseAppException as e:
            return self._handle_exception(e, "unblock room")

        self._logger.info("Room unblocked", extra={"room_number": str(room_number)})
        return self._done("Room unblocked")

    @staticmethod
    def _done(message: str) -> ServiceResult[OperationResult]:
        return ServiceResult.success(OperationResult(success=True, message=message), message=message)
