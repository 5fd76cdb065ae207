"""
Check-in API tests
Covers /rooms, /checkin, /checkin/stay-plan, /checkin/preview, /checkin/draft
and /checkin/draft/guests
"""
from decimal import Decimal
from fastapi.testclient import TestClient

from frontdesk.models.ontology import Booking, RoomStatus, SystemLog


class TestRooms:
    def test_lists_available_rooms(self, client: TestClient, receptionist_auth_headers,
                                   db_session, sample_room, sample_room_102):
        sample_room_102.status = RoomStatus.OCCUPIED
        db_session.commit()
        response = client.get("/rooms", headers=receptionist_auth_headers)
        assert response.status_code == 200
        assert [r["room_number"] for r in response.json()] == ["101"]

    def test_lists_occupied_rooms_on_request(self, client: TestClient, receptionist_auth_headers,
                                             db_session, sample_room, sample_room_102):
        sample_room_102.status = RoomStatus.OCCUPIED
        db_session.commit()
        response = client.get("/rooms", params={"status": "Occupied"},
                              headers=receptionist_auth_headers)
        assert [r["room_number"] for r in response.json()] == ["102"]

    def test_select_room(self, client: TestClient, receptionist_auth_headers, sample_room):
        response = client.post(f"/rooms/{sample_room.id}/select", headers=receptionist_auth_headers)
        assert response.status_code == 200
        assert response.json()["room_number"] == "101"

    def test_select_missing_room(self, client: TestClient, receptionist_auth_headers):
        response = client.post("/rooms/999/select", headers=receptionist_auth_headers)
        assert response.status_code == 404


class TestStayPlan:
    def test_days_to_checkout(self, client: TestClient, receptionist_auth_headers):
        response = client.post("/checkin/stay-plan", json={"stay_days": 2},
                               headers=receptionist_auth_headers)
        assert response.status_code == 200
        data = response.json()
        assert data["checkin_time"] == "2024-01-01 10:00:00"
        assert data["checkout_time"] == "2024-01-03 10:00:00"
        assert data["checkout_input"] == "2024-01-03T10:00"

    def test_checkout_to_days(self, client: TestClient, receptionist_auth_headers):
        response = client.post("/checkin/stay-plan", json={"checkout_time": "2024-01-05T08:00"},
                               headers=receptionist_auth_headers)
        assert response.json()["stay_days"] == 4

    def test_past_checkout_rejected(self, client: TestClient, receptionist_auth_headers):
        response = client.post("/checkin/stay-plan", json={"checkout_time": "2023-12-31T10:00"},
                               headers=receptionist_auth_headers)
        assert response.status_code == 400
        assert "after the check-in" in response.json()["detail"]


class TestCheckIn:
    def test_preview(self, client: TestClient, receptionist_auth_headers, sample_room,
                     primary_guest_data):
        response = client.post("/checkin/preview", headers=receptionist_auth_headers, json={
            "room_id": sample_room.id,
            "guests": [primary_guest_data],
            "stay_days": 3,
            "discount": 100,
            "advance_payment": 500,
        })
        assert response.status_code == 200
        assert Decimal(str(response.json()["bill"]["gross_total"])) == Decimal("3050")

    def test_confirm(self, client: TestClient, receptionist_auth_headers, db_session,
                     sample_room, primary_guest_data, companion_guest_data):
        response = client.post("/checkin", headers=receptionist_auth_headers, json={
            "room_id": sample_room.id,
            "guests": [primary_guest_data, companion_guest_data],
            "stay_days": 3,
            "discount": 100,
            "advance_payment": 500,
        })
        assert response.status_code == 200
        data = response.json()
        assert data["room"]["room_number"] == "101"
        assert data["room"]["status"] == "Occupied"
        assert len(data["guests"]) == 2
        assert Decimal(str(data["gross_total"])) == Decimal("3050")
        assert db_session.query(SystemLog).filter(
            SystemLog.action == "CHECKIN_COMPLETED").count() == 1

    def test_invalid_guest_is_422(self, client: TestClient, receptionist_auth_headers,
                                  db_session, sample_room, primary_guest_data):
        primary_guest_data["phone"] = "12345"
        response = client.post("/checkin", headers=receptionist_auth_headers, json={
            "room_id": sample_room.id, "guests": [primary_guest_data]})
        assert response.status_code == 422
        assert db_session.query(Booking).count() == 0

    def test_occupied_room_is_400(self, client: TestClient, receptionist_auth_headers,
                                  db_session, sample_room, primary_guest_data):
        sample_room.status = RoomStatus.OCCUPIED
        db_session.commit()
        response = client.post("/checkin", headers=receptionist_auth_headers, json={
            "room_id": sample_room.id, "guests": [primary_guest_data]})
        assert response.status_code == 400
        assert "not available" in response.json()["detail"]


class TestDraft:
    def test_round_trip(self, client: TestClient, receptionist_auth_headers):
        assert client.get("/checkin/draft", headers=receptionist_auth_headers).json() is None

        response = client.put("/checkin/draft", headers=receptionist_auth_headers, json={
            "room_id": 1, "guests": [{"name": "Ravi"}], "stay_days": 2})
        assert response.status_code == 200

        draft = client.get("/checkin/draft", headers=receptionist_auth_headers).json()
        assert draft["room_id"] == 1
        assert draft["guests"] == [{"name": "Ravi"}]

        assert client.delete("/checkin/draft", headers=receptionist_auth_headers).json() == {
            "removed": True}
        assert client.get("/checkin/draft", headers=receptionist_auth_headers).json() is None

    def test_remove_primary_guest_promotes_next(self, client: TestClient,
                                                receptionist_auth_headers,
                                                primary_guest_data, companion_guest_data):
        client.put("/checkin/draft", headers=receptionist_auth_headers, json={
            "room_id": 1, "guests": [primary_guest_data, companion_guest_data]})

        response = client.delete("/checkin/draft/guests/1", headers=receptionist_auth_headers)
        assert response.status_code == 200
        guests = response.json()["guests"]
        assert [g["name"] for g in guests] == ["Meena Kumar"]
        assert guests[0]["is_primary"] is True

        draft = client.get("/checkin/draft", headers=receptionist_auth_headers).json()
        assert draft["guests"] == guests

    def test_remove_guest_missing(self, client: TestClient, receptionist_auth_headers,
                                  primary_guest_data):
        response = client.delete("/checkin/draft/guests/1", headers=receptionist_auth_headers)
        assert response.status_code == 404

        client.put("/checkin/draft", headers=receptionist_auth_headers,
                   json={"guests": [primary_guest_data]})
        response = client.delete("/checkin/draft/guests/7", headers=receptionist_auth_headers)
        assert response.status_code == 404
