import pytest

API = "/api/v1"


@pytest.fixture
def seeded_client(client):
    response = client.post(f"{API}/rooms/initialize")
    assert response.status_code == 200
    return client


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert "X-Request-ID" in response.headers


def test_initialize_reports_created_rooms(client):
    first = client.post(f"{API}/rooms/initialize").json()
    assert first == {"created": 10, "total_rooms": 10}
    second = client.post(f"{API}/rooms/initialize", json={"total_rooms": 40}).json()
    assert second == {"created": 0, "total_rooms": 10}


def test_assign_and_read_back(seeded_client):
    response = seeded_client.post(f"{API}/rooms/5/beds/A/assign", json={"student_id": "S1"})
    assert response.status_code == 200
    body = response.json()
    assert body["room_number"] == "5"
    assert body["bed_letter"] == "A"
    assert body["wing"] == "A"
    assert body["rent"] == 5000

    room = seeded_client.get(f"{API}/rooms/5").json()
    assert room["status"] == "OCCUPIED"
    assert room["available_beds"] == ["B", "C", "D"]
    assert room["beds"]["A"]["student_id"] == "S1"

    placement = seeded_client.get(f"{API}/students/S1/bed").json()
    assert placement["room_number"] == "5"


def test_error_status_mapping(seeded_client):
    seeded_client.post(f"{API}/rooms/5/beds/A/assign", json={"student_id": "S1"})

    conflict = seeded_client.post(f"{API}/rooms/5/beds/A/assign", json={"student_id": "S2"})
    assert conflict.status_code == 409
    assert conflict.json()["error"]["code"] == "BED_CONFLICT"

    missing = seeded_client.get(f"{API}/rooms/404")
    assert missing.status_code == 404
    assert missing.json()["error"]["code"] == "ROOM_NOT_FOUND"

    invalid = seeded_client.post(f"{API}/rooms/5/beds/Z/assign", json={"student_id": "S3"})
    assert invalid.status_code == 422
    assert invalid.json()["error"]["code"] == "VALIDATION_ERROR"

    unassigned = seeded_client.get(f"{API}/students/ghost/bed")
    assert unassigned.status_code == 404
    assert unassigned.json()["error"]["code"] == "STUDENT_NOT_ASSIGNED"


def test_release_endpoint(seeded_client):
    seeded_client.post(f"{API}/rooms/5/beds/A/assign", json={"student_id": "S1"})
    mismatch = seeded_client.post(f"{API}/rooms/5/beds/A/release", json={"student_id": "S2"})
    assert mismatch.status_code == 409

    released = seeded_client.post(f"{API}/rooms/5/beds/A/release", json={"student_id": "S1"})
    assert released.status_code == 200
    assert released.json()["message"] == "Room released successfully"
    assert seeded_client.get(f"{API}/rooms/5").json()["status"] == "AVAILABLE"


def test_available_rooms_query(seeded_client):
    rooms = seeded_client.get(f"{API}/rooms/available", params={"has_ac": "true"}).json()
    assert [room["room_number"] for room in rooms] == ["10"]

    cheap = seeded_client.get(f"{API}/rooms/available", params={"max_price": 5000}).json()
    assert len(cheap) == 9

    bad = seeded_client.get(f"{API}/rooms/available", params={"min_price": 9000, "max_price": 100})
    assert bad.status_code == 422


def test_list_and_available_beds(seeded_client):
    listing = seeded_client.get(f"{API}/rooms", params={"page": 1, "limit": 3}).json()
    assert [room["room_number"] for room in listing["rooms"]] == ["1", "2", "3"]
    assert listing["pagination"] == {"current": 1, "pages": 4, "total": 10}

    beds = seeded_client.get(f"{API}/rooms/available-beds").json()
    assert beds["total"] == 40
    assert beds["available_beds"][0]["label"] == "Room 1 - Bed A"


def test_statistics_and_recommendations(seeded_client):
    for letter, student in zip("ABCD", ["S1", "S2", "S3", "S4"]):
        seeded_client.post(f"{API}/rooms/10/beds/{letter}/assign", json={"student_id": student})

    stats = seeded_client.get(f"{API}/rooms/statistics").json()
    assert stats["overall"]["occupied_rooms"] == 1
    assert stats["overall"]["bed_occupancy_rate"] == 10
    assert stats["by_wing"][0]["average_rent"] == 5200.0

    recommended = seeded_client.post(f"{API}/rooms/recommendations", json={"budget": 6000}).json()
    assert len(recommended) == 5
    assert all(candidate["room"]["room_number"] != "10" for candidate in recommended)

    default = seeded_client.post(f"{API}/rooms/recommendations")
    assert default.status_code == 200


def test_maintenance_and_block_endpoints(seeded_client):
    scheduled = seeded_client.post(
        f"{API}/rooms/3/maintenance",
        json={"maintenance_date": "2026-11-01T10:00:00", "reason": "repaint"},
    )
    assert scheduled.status_code == 200
    room = seeded_client.get(f"{API}/rooms/3").json()
    assert room["status"] == "MAINTENANCE"
    assert room["hold_reason"] == "repaint"

    assert seeded_client.post(f"{API}/rooms/3/block").status_code == 409
    assert seeded_client.post(f"{API}/rooms/3/maintenance/complete").status_code == 200
    assert seeded_client.post(f"{API}/rooms/3/maintenance/complete").status_code == 409

    assert seeded_client.post(f"{API}/rooms/4/block", json={"reason": "inspection"}).status_code == 200
    assert seeded_client.get(f"{API}/rooms/4").json()["status"] == "BLOCKED"
    assert seeded_client.post(f"{API}/rooms/4/unblock").status_code == 200
    assert seeded_client.get(f"{API}/rooms/4").json()["status"] == "AVAILABLE"


def test_body_validation_uses_error_envelope(seeded_client):
    response = seeded_client.post(f"{API}/rooms/recommendations", json={"budget": -1})
    assert response.status_code == 422
    error = response.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert "budget" in error["details"]["field_errors"]

    missing = seeded_client.post(f"{API}/rooms/5/beds/A/assign", json={})
    assert missing.status_code == 422
    assert "student_id" in missing.json()["error"]["details"]["field_errors"]

    bad_query = seeded_client.get(f"{API}/rooms", params={"page": 0})
    assert bad_query.status_code == 422
    assert "page" in bad_query.json()["error"]["details"]["field_errors"]
