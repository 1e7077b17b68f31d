"""HTTP surface: response envelope, authentication and error mapping."""

from datetime import datetime, timedelta, timezone

from jose import jwt

from shared.core.config import settings


def booking_payload(customer, hotel, service, rooms=1):
    return {
        "customer_id": customer.id,
        "hotel_bookings": [{
            "hotel_id": hotel.id,
            "room_type": "double",
            "meal_plan": "breakfast",
            "check_in_date": "2026-03-01",
            "check_out_date": "2026-03-04",
            "number_of_rooms": rooms,
        }],
        "services": [{"service_id": service.id, "quantity": 2}],
    }


class TestEnvelope:
    def test_health_is_wrapped(self, client):
        resp = client.get("/api/health")
        assert resp.status_code == 200
        body = resp.json()
        assert body["status"] == "Success"
        assert body["status_code"] == "100"
        assert body["data"] == {"status": "ok"}

    def test_create_and_fetch_booking(self, client, auth_headers, customer, hotel, service):
        resp = client.post("/api/bookings/", json=booking_payload(customer, hotel, service),
                           headers=auth_headers)
        assert resp.status_code == 200
        booking = resp.json()["data"]
        assert booking["total_cost_price"] == "200.00"
        assert booking["total_selling_price"] == "230.00"
        assert booking["status"] == "draft"

        resp = client.get(f"/api/bookings/{booking['id']}", headers=auth_headers)
        detail = resp.json()["data"]
        assert detail["booking"]["booking_number"] == booking["booking_number"]
        assert len(detail["hotel_bookings"]) == 1
        assert len(detail["service_bookings"]) == 1

    def test_payment_flow(self, client, auth_headers, customer, hotel, service):
        booking = client.post("/api/bookings/", json=booking_payload(customer, hotel, service),
                              headers=auth_headers).json()["data"]

        resp = client.post("/api/payments/", json={
            "booking_id": booking["id"], "amount": "100", "currency": "SAR"}, headers=auth_headers)
        assert resp.status_code == 200
        assert resp.json()["data"]["amount_in_base"] == "100.00"

        balance = client.get(f"/api/bookings/{booking['id']}/balance",
                             headers=auth_headers).json()["data"]
        assert balance["outstanding_amount"] == "130.00"
        assert balance["payment_status"] == "partial"

        rows = client.get("/api/reports/outstanding-invoices",
                          params={"include_partial": True}, headers=auth_headers).json()["data"]
        assert [r["booking_id"] for r in rows] == [booking["id"]]

    def test_empty_report_is_list(self, client, auth_headers):
        resp = client.get("/api/reports/profit-loss", headers=auth_headers)
        assert resp.status_code == 200
        assert resp.json()["data"] == []


class TestErrors:
    def test_missing_booking_is_404(self, client, auth_headers):
        resp = client.get("/api/bookings/12345", headers=auth_headers)
        assert resp.status_code == 404
        body = resp.json()
        assert body["status"] == "Failed"
        assert body["message"] == "Booking with ID 12345 not found"
        assert body["data"] == ""

    def test_invalid_line_is_400(self, client, auth_headers, customer, hotel, service):
        resp = client.post("/api/bookings/", json=booking_payload(customer, hotel, service, rooms=0),
                           headers=auth_headers)
        assert resp.status_code == 400
        assert resp.json()["status_code"] == "202"

    def test_missing_rate_is_404(self, client, auth_headers, customer, hotel, service):
        booking = client.post("/api/bookings/", json=booking_payload(customer, hotel, service),
                              headers=auth_headers).json()["data"]
        resp = client.post("/api/payments/", json={
            "booking_id": booking["id"], "amount": "10", "currency": "IDR"}, headers=auth_headers)
        assert resp.status_code == 404
        assert resp.json()["message"] == "Exchange rate not found for IDR to SAR"

    def test_illegal_transition_is_400(self, client, auth_headers, customer, hotel, service):
        booking = client.post("/api/bookings/", json=booking_payload(customer, hotel, service),
                              headers=auth_headers).json()["data"]
        resp = client.put(f"/api/bookings/{booking['id']}/status",
                          json={"status": "completed"}, headers=auth_headers)
        assert resp.status_code == 400

    def test_sub_cent_payment_is_400(self, client, auth_headers, customer, hotel, service):
        booking = client.post("/api/bookings/", json=booking_payload(customer, hotel, service),
                              headers=auth_headers).json()["data"]
        resp = client.post("/api/payments/", json={
            "booking_id": booking["id"], "amount": "0.001", "currency": "SAR"}, headers=auth_headers)
        assert resp.status_code == 400
        assert resp.json()["message"] == "Payment amount must be positive"

        resp = client.post("/api/expenses/", json={
            "booking_id": booking["id"], "expense_name": "Tip", "amount": "0.004"},
            headers=auth_headers)
        assert resp.status_code == 400
        assert resp.json()["message"] == "Expense amount must be positive"

    def test_duplicate_rate_is_409(self, client, auth_headers, usd_rate):
        resp = client.post("/api/exchange-rates/", json={
            "from_currency": "USD", "to_currency": "SAR", "rate": "3.8"}, headers=auth_headers)
        assert resp.status_code == 409

    def test_referenced_customer_is_409(self, client, auth_headers, customer, hotel, service):
        client.post("/api/bookings/", json=booking_payload(customer, hotel, service),
                    headers=auth_headers)
        resp = client.delete(f"/api/customers/{customer.id}", headers=auth_headers)
        assert resp.status_code == 409
        assert resp.json()["status_code"] == "206"

    def test_malformed_body_is_422(self, client, auth_headers):
        resp = client.post("/api/bookings/", json={"customer_id": "abc"}, headers=auth_headers)
        assert resp.status_code == 422
        assert resp.json()["status"] == "Failed"

    def test_recap_requires_dates(self, client, auth_headers):
        resp = client.get("/api/reports/hotel-recapitulation", headers=auth_headers)
        assert resp.status_code == 422


class TestAuth:
    def test_missing_token(self, client):
        resp = client.get("/api/bookings/all")
        assert resp.status_code in (401, 403)

    def test_bad_signature(self, client, user):
        token = jwt.encode({"user_id": str(user.id)}, "wrong-secret", algorithm="HS256")
        resp = client.get("/api/bookings/all", headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == 401

    def test_expired_token(self, client, user):
        token = jwt.encode(
            {"user_id": str(user.id), "exp": datetime.now(timezone.utc) - timedelta(minutes=1)},
            settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)
        resp = client.get("/api/bookings/all", headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == 401

    def test_inactive_user(self, client, db, user, auth_headers):
        user.is_active = False
        db.commit()
        resp = client.get("/api/bookings/all", headers=auth_headers)
        assert resp.status_code == 403

    def test_creator_comes_from_token(self, client, auth_headers, user, customer):
        resp = client.post("/api/bookings/", json={"customer_id": customer.id}, headers=auth_headers)
        assert resp.json()["data"]["created_by"] == user.id


class TestDelete:
    def test_delete_customer_envelope(self, client, auth_headers, customer):
        resp = client.delete(f"/api/customers/{customer.id}", headers=auth_headers)
        assert resp.status_code == 200
        body = resp.json()
        assert body["status_code"] == "101"
        assert body["message"] == "Customer deleted successfully"

        resp = client.get(f"/api/customers/{customer.id}", headers=auth_headers)
        assert resp.status_code == 404


class TestExportEndpoint:
    def test_hotel_recap_export(self, client, auth_headers, customer, hotel, service):
        client.post("/api/bookings/", json=booking_payload(customer, hotel, service, rooms=2),
                    headers=auth_headers)

        resp = client.get("/api/reports/export", params={
            "type": "hotel-recap", "start_date": "2026-03-01", "end_date": "2026-03-31"},
            headers=auth_headers)
        assert resp.status_code == 200
        export = resp.json()["data"]
        assert export["filename"] == "hotel-recap-report.xlsx"
        assert export["data"][0]["Hotel"] == "Hilton Makkah"
        assert export["data"][0]["Rooms"] == 2
        assert export["data"][0]["Room Nights"] == 6
