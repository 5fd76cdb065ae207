"""
Checkout API tests
Covers /checkout/occupied, /checkout/{id}/start, /bill, confirm and /invoice
"""
from datetime import timedelta
from decimal import Decimal
from fastapi.testclient import TestClient

from frontdesk.models.ontology import GuestHistory, RoomStatus


class TestOccupied:
    def test_list_and_search(self, client: TestClient, receptionist_auth_headers,
                             checked_in_booking):
        response = client.get("/checkout/occupied", headers=receptionist_auth_headers)
        assert [b["id"] for b in response.json()] == [checked_in_booking.id]

        response = client.get("/checkout/occupied", params={"search": "999"},
                              headers=receptionist_auth_headers)
        assert response.json() == []

    def test_start(self, client: TestClient, receptionist_auth_headers, checked_in_booking):
        response = client.post(f"/checkout/{checked_in_booking.id}/start",
                               headers=receptionist_auth_headers)
        assert response.status_code == 200
        assert response.json()["room_number"] == "101"


class TestBillReview:
    def test_bill(self, client: TestClient, receptionist_auth_headers, clock, checked_in_booking):
        clock.advance(timedelta(days=3))
        response = client.get(f"/checkout/{checked_in_booking.id}/bill",
                              params={"extra_charges": "120"},
                              headers=receptionist_auth_headers)
        assert response.status_code == 200
        bill = response.json()["bill"]
        assert bill["actual_days"] == 3
        assert Decimal(str(bill["balance_due"])) == Decimal("2670")

    def test_negative_extra_charges_rejected(self, client: TestClient, receptionist_auth_headers,
                                             checked_in_booking):
        response = client.get(f"/checkout/{checked_in_booking.id}/bill",
                              params={"extra_charges": "-5"},
                              headers=receptionist_auth_headers)
        assert response.status_code == 422

    def test_missing_booking(self, client: TestClient, receptionist_auth_headers):
        response = client.get("/checkout/999/bill", headers=receptionist_auth_headers)
        assert response.status_code == 404


class TestConfirm:
    def test_checkout(self, client: TestClient, receptionist_auth_headers, db_session, clock,
                      sample_room, checked_in_booking):
        booking_id = checked_in_booking.id
        clock.advance(timedelta(days=3))
        response = client.post(f"/checkout/{booking_id}", headers=receptionist_auth_headers,
                               json={"payment_method": "Cash"})
        assert response.status_code == 200
        data = response.json()
        assert data["payment_method"] == "Cash"
        assert Decimal(str(data["bill"]["balance_due"])) == Decimal("2550")

        db_session.refresh(sample_room)
        assert sample_room.status == RoomStatus.AVAILABLE
        assert db_session.query(GuestHistory).count() == 1

        again = client.post(f"/checkout/{booking_id}", headers=receptionist_auth_headers,
                            json={"payment_method": "Cash"})
        assert again.status_code == 404
        assert db_session.query(GuestHistory).count() == 1

    def test_payment_method_required(self, client: TestClient, receptionist_auth_headers,
                                     checked_in_booking):
        response = client.post(f"/checkout/{checked_in_booking.id}",
                               headers=receptionist_auth_headers, json={})
        assert response.status_code == 400
        assert "payment method" in response.json()["detail"]

    def test_unsupported_payment_method(self, client: TestClient, receptionist_auth_headers,
                                        checked_in_booking):
        response = client.post(f"/checkout/{checked_in_booking.id}",
                               headers=receptionist_auth_headers,
                               json={"payment_method": "Cheque"})
        assert response.status_code == 422


class TestInvoice:
    def test_invoice(self, client: TestClient, receptionist_auth_headers, clock,
                     checked_in_booking):
        clock.advance(timedelta(days=1))
        response = client.get(f"/checkout/{checked_in_booking.id}/invoice",
                              headers=receptionist_auth_headers)
        assert response.status_code == 200
        data = response.json()
        assert data["hotel_name"]
        assert data["guest_name"] == "Ravi Kumar"
        assert data["days"] == 1
        assert Decimal(str(data["cgst"])) == Decimal("25")
