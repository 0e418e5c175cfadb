import pytest
from fastapi import status
from app.db import Collection
from app.models.room import Room
from tests.conf_tests import client, clear_db, test_db, host_email, auth_headers, auth_headers_for


TEST_ROOM_DATA = {
    "title": "Cabin by the lake",
    "location": "Lake Tahoe",
    "price": "50",
    "host": {"email": "host@example.com", "name": "Hosty"},
}


@pytest.fixture
def test_room(test_db):
    room = Collection(test_db, Room).insert_one({**TEST_ROOM_DATA, "booked": False})
    return room.inserted_id


# Tests
def test_create_room_success():
    response = client.post("/rooms", json=TEST_ROOM_DATA)
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["acknowledged"] is True
    assert len(data["insertedId"]) == 32


def test_create_room_roundtrip():
    room_id = client.post("/rooms", json=TEST_ROOM_DATA).json()["insertedId"]
    response = client.get(f"/room/{room_id}")
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["_id"] == room_id
    assert data["booked"] is False
    assert data["title"] == TEST_ROOM_DATA["title"]
    assert data["price"] == "50"
    assert data["host"] == TEST_ROOM_DATA["host"]


def test_create_room_without_host_is_rejected():
    response = client.post("/rooms", json={"title": "Orphan room"})
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_get_rooms_with_data(test_room):
    response = client.get("/rooms")
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert len(data) == 1
    assert data[0]["_id"] == test_room


def test_get_room_missing_returns_null():
    response = client.get(f"/room/{'0' * 32}")
    assert response.status_code == status.HTTP_200_OK
    assert response.json() is None


def test_get_room_malformed_id():
    response = client.get("/room/not-an-id")
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_get_host_rooms_unauthorized(test_room, host_email):
    response = client.get(f"/rooms/{host_email}")
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_get_host_rooms_invalid_token(test_room, host_email):
    response = client.get(f"/rooms/{host_email}", headers={"Authorization": "Bearer garbage"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_get_host_rooms_forbidden(test_room, host_email):
    response = client.get(f"/rooms/{host_email}", headers=auth_headers_for("someone@example.com"))
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_get_host_rooms_success(test_room, host_email, auth_headers):
    client.post("/rooms", json={**TEST_ROOM_DATA, "host": {"email": "other@example.com"}})
    response = client.get(f"/rooms/{host_email}", headers=auth_headers)
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert [room["_id"] for room in data] == [test_room]
    assert data[0]["host"]["email"] == host_email


def test_update_room_status_toggles(test_room):
    response = client.patch(f"/rooms/status/{test_room}", json={"status": True})
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["modifiedCount"] == 1
    assert client.get(f"/room/{test_room}").json()["booked"] is True

    client.patch(f"/rooms/status/{test_room}", json={"status": True})
    assert client.get(f"/room/{test_room}").json()["booked"] is True

    client.patch(f"/rooms/status/{test_room}", json={"status": False})
    assert client.get(f"/room/{test_room}").json()["booked"] is False


def test_update_room_status_not_found():
    response = client.patch(f"/rooms/status/{'a' * 32}", json={"status": True})
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["detail"] == "Room not found"


def test_update_room_status_requires_status(test_room):
    response = client.patch(f"/rooms/status/{test_room}", json={})
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_update_room_unauthorized(test_room):
    response = client.put(f"/rooms/{test_room}", json=TEST_ROOM_DATA)
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_update_room_success(auth_headers, test_room):
    update_data = {**TEST_ROOM_DATA, "title": "Renovated cabin", "price": "75"}
    response = client.put(f"/rooms/{test_room}", json=update_data, headers=auth_headers)
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["matchedCount"] == 1
    data = client.get(f"/room/{test_room}").json()
    assert data["title"] == "Renovated cabin"
    assert data["price"] == "75"
    assert data["location"] == TEST_ROOM_DATA["location"]


def test_update_room_upserts_missing(auth_headers):
    room_id = "b" * 32
    response = client.put(f"/rooms/{room_id}", json=TEST_ROOM_DATA, headers=auth_headers)
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["upsertedId"] == room_id
    assert client.get(f"/room/{room_id}").json()["title"] == TEST_ROOM_DATA["title"]


def test_delete_room_success(test_room, test_db):
    response = client.delete(f"/rooms/{test_room}")
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["deletedCount"] == 1
    assert test_db.query(Room).filter(Room.id == test_room).first() is None
    assert client.get(f"/room/{test_room}").json() is None


def test_delete_room_not_found():
    response = client.delete(f"/rooms/{'c' * 32}")
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_room_lifecycle_end_to_end():
    created = client.post(
        "/rooms", json={"host": {"email": "h@x.com"}, "price": "50", "booked": False}
    ).json()
    room_id = created["insertedId"]

    rooms = client.get("/rooms/h@x.com", headers=auth_headers_for("h@x.com")).json()
    assert [room["_id"] for room in rooms] == [room_id]

    assert client.delete(f"/rooms/{room_id}").status_code == status.HTTP_200_OK
    assert client.get(f"/room/{room_id}").json() is None


def test_create_room_ignores_client_id():
    payload = {**TEST_ROOM_DATA, "_id": "chosen"}
    first = client.post("/rooms", json=payload)
    second = client.post("/rooms", json=payload)
    assert first.status_code == status.HTTP_200_OK
    assert second.status_code == status.HTTP_200_OK
    first_id, second_id = first.json()["insertedId"], second.json()["insertedId"]
    assert first_id != second_id
    for room_id in (first_id, second_id):
        assert room_id != "chosen"
        assert client.get(f"/room/{room_id}").json()["_id"] == room_id


def test_get_host_rooms_mixed_case_domain():
    room_id = client.post(
        "/rooms", json={"host": {"email": "h@X.com"}, "title": "Loft"}
    ).json()["insertedId"]
    response = client.get("/rooms/h@X.com", headers=auth_headers_for("h@X.com"))
    assert response.status_code == status.HTTP_200_OK
    assert [room["_id"] for room in response.json()] == [room_id]

    response = client.get("/rooms/h@x.com", headers=auth_headers_for("h@X.com"))
    assert response.status_code == status.HTTP_200_OK
    assert [room["_id"] for room in response.json()] == [room_id]


def test_get_host_rooms_invalid_email_is_forbidden(auth_headers):
    response = client.get("/rooms/not-an-email", headers=auth_headers)
    assert response.status_code == status.HTTP_403_FORBIDDEN
