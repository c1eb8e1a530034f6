from datetime import datetime

import pytest

from hostel_rooms.core.exceptions import (
    ConflictError,
    ErrorCode,
    ResourceNotFoundError,
    RoomNotFoundError,
    ValidationError,
)
from hostel_rooms.models import BedLetter, Room, RoomHold, RoomStatus, Wing
from hostel_rooms.services.room import RoomService


def room_numbers(rooms):
    return [room.room_number for room in rooms]


# ----------------------------------------------------------------------------
# Initialization
# ----------------------------------------------------------------------------


def test_initialize_creates_inventory(service, db):
    assert service.repository.count() == 10
    rooms = db.query(Room).all()
    assert all(len(room.beds) == 4 for room in rooms)
    assert all(room.status == RoomStatus.AVAILABLE for room in rooms)


def test_initialize_is_idempotent(service):
    first = service.initialize_rooms().unwrap()
    assert (first.created, first.total_rooms) == (0, 10)
    assert service.initialize_rooms(50).unwrap().created == 0
    assert service.repository.count() == 10


def test_initialize_losing_race_is_a_noop(service, monkeypatch):
    # Another initializer committed between the emptiness check and the insert
    counts = iter([0, 10])
    monkeypatch.setattr(service.repository, "count", lambda: next(counts))

    result = service.initialize_rooms()
    assert result.is_success
    assert result.data.created == 0
    assert result.data.total_rooms == 10


def test_initialize_rejects_non_positive_total(db, small_config):
    with pytest.raises(ValidationError):
        RoomService(db, small_config).initialize_rooms(0).unwrap()


def test_full_inventory_layout(full_service):
    stats = full_service.get_room_statistics().unwrap()
    assert stats.overall.total_rooms == 200
    assert stats.overall.total_beds == 800
    assert [row.total_rooms for row in stats.by_wing] == [50, 50, 50, 50]
    assert [row.floor for row in stats.by_floor] == list(range(1, 11))
    assert all(row.total_rooms == 20 for row in stats.by_floor)

    ac_rooms = full_service.get_available_rooms({"has_ac": True}).unwrap()
    assert len(ac_rooms) == 20
    assert all(room.rent == 7000 for room in ac_rooms)


# ----------------------------------------------------------------------------
# Assign / release
# ----------------------------------------------------------------------------


def test_assign_bed_returns_confirmation(service):
    confirmation = service.assign_bed("S1", "5", "A").unwrap()
    assert confirmation.room_number == "5"
    assert confirmation.bed_letter == BedLetter.A
    assert confirmation.floor == 1
    assert confirmation.wing == Wing.A
    assert confirmation.rent == 5000
    assert confirmation.facilities.has_attached_bathroom is True

    available = service.get_available_rooms({"wing": "A"}).unwrap()
    room5 = next(room for room in available if room.room_number == "5")
    assert room5.available_beds == [BedLetter.B, BedLetter.C, BedLetter.D]
    assert room5.occupied_beds == 1
    assert room5.status == RoomStatus.OCCUPIED


def test_assign_rejects_lowercase_bed_letter(service):
    with pytest.raises(ValidationError):
        service.assign_bed("S1", "2", "b").unwrap()
    assert service.get_room("2").unwrap().occupied_beds == 0


def test_assign_occupied_bed_conflicts(service):
    service.assign_bed("S1", "5", "A").unwrap()
    with pytest.raises(ConflictError) as exc_info:
        service.assign_bed("S2", "5", "A").unwrap()
    assert exc_info.value.error_code == ErrorCode.BED_CONFLICT
    assert service.get_room("5").unwrap().beds[BedLetter.A].student_id == "S1"


def test_stale_session_cannot_double_book(service, session_factory, small_config):
    other = session_factory()
    try:
        late = RoomService(other, small_config)
        # Loaded while bed A is still free
        assert late.get_room("5").unwrap().available_beds == list(BedLetter)

        service.assign_bed("S1", "5", "A").unwrap()

        with pytest.raises(ConflictError) as exc_info:
            late.assign_bed("S2", "5", "A").unwrap()
        assert exc_info.value.error_code == ErrorCode.BED_CONFLICT
    finally:
        other.close()

    check = session_factory()
    try:
        room = RoomService(check, small_config).get_room("5").unwrap()
        assert room.beds[BedLetter.A].student_id == "S1"
        assert room.occupied_beds == 1
    finally:
        check.close()


def test_failed_operation_reports_error_result(service):
    service.assign_bed("S1", "5", "A").unwrap()
    result = service.assign_bed("S2", "5", "A")
    assert not result
    assert result.is_success is False
    assert result.data is None
    assert result.error.code == ErrorCode.BED_CONFLICT
    assert result.error.status_code == 409
    assert result.message == "Bed A in room 5 is already occupied"
    assert result.error.details == {"room_number": "5", "bed_letter": "A"}
    assert isinstance(result.error.cause, ConflictError)


def test_assign_student_twice_conflicts(service):
    service.assign_bed("S1", "5", "A").unwrap()
    with pytest.raises(ConflictError) as exc_info:
        service.assign_bed("S1", "6", "B").unwrap()
    assert exc_info.value.error_code == ErrorCode.STUDENT_ALREADY_ASSIGNED
    assert service.get_room("6").unwrap().occupied_beds == 0


def test_assign_invalid_bed_letter(service):
    with pytest.raises(ValidationError):
        service.assign_bed("S1", "5", "E").unwrap()


def test_assign_unknown_room(service):
    with pytest.raises(RoomNotFoundError) as exc_info:
        service.assign_bed("S1", "999", "A").unwrap()
    assert exc_info.value.status_code == 404


def test_full_room_is_occupied_and_hidden(service):
    for letter, student in zip("ABCD", ["S1", "S2", "S3", "S4"]):
        service.assign_bed(student, "10", letter).unwrap()

    room = service.get_room("10").unwrap()
    assert room.status == RoomStatus.OCCUPIED
    assert room.available_beds == []
    assert "10" not in room_numbers(service.get_available_rooms().unwrap())


def test_release_bed(service):
    service.assign_bed("S1", "5", "A").unwrap()
    result = service.release_bed("S1", "5", "A").unwrap()
    assert result.success is True
    assert result.message == "Room released successfully"

    room = service.get_room("5").unwrap()
    assert room.status == RoomStatus.AVAILABLE
    assert room.beds[BedLetter.A].is_occupied is False
    assert room.beds[BedLetter.A].student_id is None
    # Student can be placed again after release
    service.assign_bed("S1", "6", "C").unwrap()


def test_release_mismatch_conflicts(service):
    service.assign_bed("S1", "5", "A").unwrap()
    with pytest.raises(ConflictError):
        service.release_bed("S2", "5", "A").unwrap()
    with pytest.raises(ConflictError):
        service.release_bed("S1", "5", "B").unwrap()
    assert service.get_room("5").unwrap().beds[BedLetter.A].student_id == "S1"


def test_release_keeps_room_occupied_while_others_remain(service):
    service.assign_bed("S1", "3", "A").unwrap()
    service.assign_bed("S2", "3", "B").unwrap()
    service.release_bed("S1", "3", "A").unwrap()
    room = service.get_room("3").unwrap()
    assert room.status == RoomStatus.OCCUPIED
    assert room.occupied_beds == 1


def test_find_student_bed(service):
    service.assign_bed("S7", "8", "D").unwrap()
    placement = service.find_student_bed("S7").unwrap()
    assert placement.room_number == "8"
    assert placement.bed_letter == BedLetter.D
    assert placement.occupied_since is not None

    with pytest.raises(ResourceNotFoundError) as exc_info:
        service.find_student_bed("nobody").unwrap()
    assert exc_info.value.error_code == ErrorCode.STUDENT_NOT_ASSIGNED


# ----------------------------------------------------------------------------
# Queries
# ----------------------------------------------------------------------------


def test_available_rooms_ordered_and_filtered(service):
    assert room_numbers(service.get_available_rooms().unwrap()) == [str(n) for n in range(1, 11)]
    assert room_numbers(service.get_available_rooms({"has_ac": True}).unwrap()) == ["10"]
    assert room_numbers(service.get_available_rooms({"wing": "B"}).unwrap()) == []
    assert room_numbers(service.get_available_rooms({"price_range": {"min": 6000}}).unwrap()) == ["10"]
    assert len(service.get_available_rooms({"price_range": {"max": 5000}}).unwrap()) == 9


def test_available_rooms_rejects_bad_price_range(service):
    with pytest.raises(ValidationError):
        service.get_available_rooms({"price_range": {"min": 8000, "max": 1000}}).unwrap()


def test_available_rooms_exclude_held_rooms(service):
    service.block_room("4", "pest control").unwrap()
    service.schedule_maintenance("7", datetime(2026, 11, 1)).unwrap()
    numbers = room_numbers(service.get_available_rooms().unwrap())
    assert "4" not in numbers
    assert "7" not in numbers


def test_list_rooms_paginates(service):
    page = service.list_rooms(page=2, limit=4).unwrap()
    assert room_numbers(page.rooms) == ["5", "6", "7", "8"]
    assert page.pagination.current == 2
    assert page.pagination.pages == 3
    assert page.pagination.total == 10

    searched = service.list_rooms(search="1").unwrap()
    assert room_numbers(searched.rooms) == ["1", "10"]
    assert searched.pagination.total == 2


def test_list_rooms_search_treats_wildcards_literally(service):
    for term in ("_", "%", "1%"):
        listing = service.list_rooms(search=term).unwrap()
        assert listing.rooms == []
        assert listing.pagination.total == 0


def test_list_rooms_rejects_bad_paging(service):
    with pytest.raises(ValidationError):
        service.list_rooms(page=0).unwrap()
    with pytest.raises(ValidationError):
        service.list_rooms(limit=101).unwrap()


def test_list_available_beds(service):
    service.assign_bed("S1", "1", "A").unwrap()
    service.block_room("2").unwrap()
    beds = service.list_available_beds().unwrap()
    assert beds.total == 10 * 4 - 1 - 4
    first = beds.available_beds[0]
    assert (first.room_number, first.bed_letter) == ("1", BedLetter.B)
    assert first.label == "Room 1 - Bed B"


# ----------------------------------------------------------------------------
# Statistics
# ----------------------------------------------------------------------------


def test_statistics_invariants(service):
    service.assign_bed("S1", "1", "A").unwrap()
    service.assign_bed("S2", "2", "A").unwrap()
    service.schedule_maintenance("3", "2026-11-01T09:00:00").unwrap()
    stats = service.get_room_statistics().unwrap().overall

    assert stats.total_rooms == 10
    assert stats.occupied_rooms == 2
    assert stats.maintenance_rooms == 1
    assert stats.available_rooms == 7
    assert stats.occupancy_rate == 20
    assert stats.total_beds == 40
    assert stats.occupied_beds == 2
    assert stats.available_beds == 38
    assert stats.bed_occupancy_rate == 5


def test_statistics_for_full_ac_room(service):
    for letter, student in zip("ABCD", ["S1", "S2", "S3", "S4"]):
        service.assign_bed(student, "10", letter).unwrap()
    stats = service.get_room_statistics().unwrap()

    assert stats.overall.occupied_rooms == 1
    assert stats.overall.occupied_beds == 4
    (wing_a,) = stats.by_wing
    assert wing_a.wing == Wing.A
    assert wing_a.occupied_rooms == 1
    assert wing_a.average_rent == 5200.0


def test_statistics_on_empty_inventory(db, small_config):
    stats = RoomService(db, small_config).get_room_statistics().unwrap()
    assert stats.overall.total_rooms == 0
    assert stats.overall.occupancy_rate == 0
    assert stats.overall.bed_occupancy_rate == 0
    assert stats.by_wing == []


# ----------------------------------------------------------------------------
# Recommendations
# ----------------------------------------------------------------------------


def test_recommendations_are_limited_and_sorted(service):
    recommended = service.find_optimal_rooms().unwrap()
    assert len(recommended) == 5
    scores = [candidate.score for candidate in recommended]
    assert scores == sorted(scores, reverse=True)
    # Equal scores keep room-number order
    assert [candidate.room.room_number for candidate in recommended] == ["1", "2", "3", "4", "5"]


def test_recommendations_prefer_emptier_rooms(service):
    service.assign_bed("S1", "1", "A").unwrap()
    recommended = service.find_optimal_rooms({}).unwrap()
    numbers = [candidate.room.room_number for candidate in recommended]
    assert "1" not in numbers
    assert numbers == ["2", "3", "4", "5", "6"]


def test_recommendations_apply_preferences_as_filters(service):
    recommended = service.find_optimal_rooms({"has_ac": True}).unwrap()
    assert [candidate.room.room_number for candidate in recommended] == ["10"]
    assert recommended[0].score == 10 + 5 + 12

    assert service.find_optimal_rooms({"budget": 4000}).unwrap() == []
    assert service.find_optimal_rooms({"wing": "C"}).unwrap() == []


def test_recommendations_reject_invalid_preferences(service):
    with pytest.raises(ValidationError):
        service.find_optimal_rooms({"budget": -1}).unwrap()


# ----------------------------------------------------------------------------
# Maintenance and blocking
# ----------------------------------------------------------------------------


def test_maintenance_lifecycle(service):
    service.assign_bed("S1", "6", "A").unwrap()
    service.schedule_maintenance("6", "2026-11-01", "leaking tap").unwrap()

    room = service.get_room("6").unwrap()
    assert room.status == RoomStatus.MAINTENANCE
    assert room.hold == RoomHold.MAINTENANCE
    assert room.hold_reason == "leaking tap"
    assert room.maintenance_scheduled is not None
    # Occupants are untouched
    assert room.beds[BedLetter.A].student_id == "S1"

    service.complete_maintenance("6").unwrap()
    room = service.get_room("6").unwrap()
    assert room.status == RoomStatus.OCCUPIED
    assert room.hold is None
    assert room.hold_reason is None
    assert room.maintenance_scheduled is None
    assert room.last_maintenance is not None


def test_complete_maintenance_requires_hold(service):
    with pytest.raises(ConflictError):
        service.complete_maintenance("6").unwrap()


def test_schedule_maintenance_rejects_bad_date(service):
    with pytest.raises(ValidationError):
        service.schedule_maintenance("6", "next tuesday").unwrap()


def test_block_and_unblock(service):
    service.block_room("2", "inspection").unwrap()
    room = service.get_room("2").unwrap()
    assert room.status == RoomStatus.BLOCKED
    assert room.hold_reason == "inspection"

    with pytest.raises(ConflictError):
        service.unblock_room("9").unwrap()

    service.unblock_room("2").unwrap()
    assert service.get_room("2").unwrap().status == RoomStatus.AVAILABLE


def test_block_refused_during_maintenance(service):
    service.schedule_maintenance("2", "2026-11-01").unwrap()
    with pytest.raises(ConflictError):
        service.block_room("2").unwrap()


def test_assign_into_held_room_is_allowed(service):
    service.block_room("2").unwrap()
    service.assign_bed("S1", "2", "A").unwrap()
    room = service.get_room("2").unwrap()
    assert room.status == RoomStatus.BLOCKED
    assert room.occupied_beds == 1
