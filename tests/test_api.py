"""HTTP surface: status codes, error shape and the end-to-end scenarios."""

import pytest


class TestPublicEndpoints:
    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok"}
        assert client.get("/api/health").json() == {"ok": True}

    def test_hotpoints(self, client):
        body = client.get("/api/hotpoints").json()

        assert len(body) == 18
        assert body[0] == {
            "id": "hp1", "name": "Kigali", "address": "Kigali City Center",
            "latitude": -1.9441, "longitude": 30.0619, "country": "Rwanda",
        }

    def test_user(self, client):
        assert client.get("/api/users/u_scanner_1").json()["agencyId"] == "u_agency_1"

        r = client.get("/api/users/nobody")
        assert r.status_code == 404
        assert r.json() == {"error": "User not found"}

    def test_vehicles(self, client):
        assert [v["id"] for v in client.get("/api/vehicles", params={"userId": "u_agency_1"}).json()] == ["v4", "v5"]


class TestTrips:
    def test_search_is_hydrated(self, client):
        trips = client.get("/api/trips", params={"fromId": "hp1", "toId": "hp2", "type": "insta"}).json()

        assert [t["id"] for t in trips] == ["t1"]
        trip = trips[0]
        assert trip["departureHotpoint"]["name"] == "Kigali"
        assert trip["destinationHotpoint"]["name"] == "Rubavu"
        assert trip["driver"]["name"] == "Camille"
        assert trip["vehicle"]["licensePlate"] == "RAB-123-A"
        assert trip["seatsAvailable"] == 2

    def test_get_unknown_trip(self, client):
        r = client.get("/api/trips/t_missing")
        assert r.status_code == 404
        assert r.json() == {"error": "Trip not found"}

    def test_publish_and_change_status(self, client):
        r = client.post("/api/trips", json={
            "driverId": "u_driver_3", "vehicleId": "v3",
            "departureHotpointId": "hp6", "destinationHotpointId": "hp7",
            "seatsAvailable": 3, "pricePerSeat": 12000, "paymentMethods": ["cash"],
        })
        assert r.status_code == 201
        trip_id = r.json()["id"]

        r = client.put(f"/api/trips/{trip_id}/status", json={"status": "cancelled"})
        assert r.status_code == 200
        assert r.json()["status"] == "cancelled"

    def test_publish_with_unknown_vehicle(self, client):
        r = client.post("/api/trips", json={
            "driverId": "u_driver_3", "vehicleId": "v_missing",
            "departureHotpointId": "hp6", "destinationHotpointId": "hp7",
        })
        assert r.status_code == 400
        assert r.json() == {"error": "Missing driver, vehicle, or hotpoints"}

    def test_driver_trips(self, client):
        assert [t["id"] for t in client.get("/api/trips/driver/u_driver_1").json()] == ["t4", "t1"]

    def test_completed_trip_cannot_be_reactivated(self, client):
        client.put("/api/trips/t1/status", json={"status": "completed", "actorId": "u_driver_1"})

        r = client.put("/api/trips/t1/status", json={"status": "active", "actorId": "u_driver_1"})

        assert r.status_code == 400
        assert r.json() == {"error": "Trip is already completed"}
        assert client.get("/api/trips/t1").json()["status"] == "completed"

    def test_bulk_publish_series(self, client):
        r = client.post("/api/trips/bulk", json={
            "baseTripData": {
                "driverId": "u_driver_3", "vehicleId": "v3",
                "departureHotpointId": "hp6", "destinationHotpointId": "hp7",
                "seatsAvailable": 3, "pricePerSeat": 9000, "durationMinutes": 90,
            },
            "departureDate": "2026-03-01",
            "startTime": "22:00",
            "intervalMinutes": 30,
            "endTime": "23:00",
        })

        assert r.status_code == 201
        trips = r.json()
        assert [t["departureTime"] for t in trips] == ["22:00", "22:30", "23:00"]
        assert [t["arrivalTime"] for t in trips] == ["23:30", "00:00", "00:30"]
        assert {t["type"] for t in trips} == {"scheduled"}
        assert {t["departureDate"] for t in trips} == {"2026-03-01"}
        found = client.get("/api/trips", params={"fromId": "hp6", "date": "2026-03-01"}).json()
        assert len(found) == 3

    def test_bulk_publish_with_unknown_hotpoint(self, client):
        r = client.post("/api/trips/bulk", json={
            "baseTripData": {
                "driverId": "u_driver_3", "vehicleId": "v3",
                "departureHotpointId": "hp_missing", "destinationHotpointId": "hp7",
            },
        })

        assert r.status_code == 400
        assert r.json() == {"error": "Missing driver, vehicle, or hotpoints"}


class TestBookingScenarios:
    def book(self, client, passenger: str, seats: int = 1, method: str = "cash"):
        return client.post("/api/bookings", json={
            "tripId": "t1", "passenger": passenger, "seats": seats, "paymentMethod": method, "isFullCar": False,
        })

    def test_book_fill_reject_cancel(self, client):
        # A: one seat with cash
        r = self.book(client, "u_passenger_2")
        assert r.status_code == 201
        first = r.json()
        assert first["trip"]["seatsAvailable"] == 1
        assert first["status"] == "upcoming"
        assert first["paymentStatus"] == "cash_on_pickup"
        assert first["ticketId"] == f"tk_{first['id']}"
        assert first["passenger"]["name"] == "Amine"

        # B: the last seat
        second = self.book(client, "u_passenger_3", method="card").json()
        assert second["trip"]["seatsAvailable"] == 0
        assert second["trip"]["status"] == "full"

        # C: nothing left
        r = self.book(client, "u_passenger_1")
        assert r.status_code == 400
        assert r.json() == {"error": "Trip is not available"}

        # D: cancelling A gives back its one seat
        r = client.post(f"/api/bookings/{first['id']}/cancel", json={"passengerId": "u_passenger_2"})
        assert r.status_code == 200
        assert r.json()["status"] == "cancelled"
        trip = client.get("/api/trips/t1").json()
        assert trip["seatsAvailable"] == 1
        assert trip["status"] == "active"

    def test_unknown_trip_is_404(self, client):
        r = client.post("/api/bookings", json={"tripId": "t_missing", "passenger": "u_passenger_1", "seats": 1, "paymentMethod": "cash"})
        assert r.status_code == 404
        assert r.json() == {"error": "Trip not found"}

    def test_missing_seats_is_400(self, client):
        r = client.post("/api/bookings", json={"tripId": "t1", "passenger": "u_passenger_1", "paymentMethod": "cash"})
        assert r.status_code == 400
        assert r.json() == {"error": "Seats must be greater than zero"}

    def test_malformed_body_uses_error_shape(self, client):
        r = client.post("/api/bookings", json={"tripId": "t1", "seats": "many"})
        assert r.status_code == 400
        assert set(r.json()) == {"error"}

    def test_cancel_by_someone_else_is_403(self, client):
        r = client.post("/api/bookings/b1/cancel", json={"passengerId": "u_passenger_2"})
        assert r.status_code == 403
        assert r.json() == {"error": "Only the booking passenger can cancel this booking"}

    def test_cancel_without_body_is_403(self, client):
        assert client.post("/api/bookings/b1/cancel").status_code == 403

    def test_cancel_unknown_booking_is_404(self, client):
        r = client.post("/api/bookings/b_missing/cancel", json={"passengerId": "u_passenger_1"})
        assert r.status_code == 404

    def test_list_bookings_for_user(self, client):
        ids = [b["id"] for b in client.get("/api/bookings", params={"userId": "u_passenger_1"}).json()]
        assert ids == ["b3", "b1", "b2"]

    def test_driver_advances_status(self, client):
        r = client.put("/api/bookings/b1/status", json={"status": "ongoing", "actorId": "u_driver_1"})
        assert r.status_code == 200
        assert r.json()["status"] == "ongoing"

        r = client.put("/api/bookings/b1/status", json={"status": "ongoing", "actorId": "u_driver_2"})
        assert r.status_code == 403


class TestTickets:
    def test_ticket_then_validate(self, client):
        ticket = client.get("/api/bookings/b1/ticket").json()
        assert ticket["ticketNumber"] == "IHT-B1-2026"

        r = client.post("/api/tickets/validate", json={"payload": ticket["qrPayload"], "validatorUserId": "u_driver_1"})
        assert r.status_code == 200
        body = r.json()
        assert body["valid"] is True
        assert body["bookingId"] == "b1"
        assert body["ticket"]["qrPayload"] == ticket["qrPayload"]

        assert client.get("/api/scanner/count", params={"userId": "u_driver_1"}).json() == 1

    def test_tampered_payload_is_200_with_reason(self, client):
        payload = client.get("/api/bookings/b1/ticket").json()["qrPayload"]
        tampered = payload[:-1] + ("0" if payload[-1] != "0" else "1")

        r = client.post("/api/tickets/validate", json={"payload": tampered})

        assert r.status_code == 200
        body = r.json()
        assert body["valid"] is False
        assert body["reason"] == "Invalid QR checksum"
        assert "scannedAt" in body

    @pytest.mark.parametrize("body", [
        {"payload": None},
        {"payload": 12345},
        {"payload": ["IHTQR", "tk_b1"]},
        {"payload": {"ticketId": "tk_b1"}},
        {"validatorUserId": "u_driver_1"},
        {},
    ])
    def test_unusable_payload_is_200_malformed(self, client, body):
        r = client.post("/api/tickets/validate", json=body)

        assert r.status_code == 200
        assert r.json() == {"valid": False, "reason": "Malformed QR payload", "scannedAt": r.json()["scannedAt"]}

    def test_missing_body_is_200_malformed(self, client):
        r = client.post("/api/tickets/validate")

        assert r.status_code == 200
        assert r.json()["valid"] is False
        assert r.json()["reason"] == "Malformed QR payload"

    def test_non_string_validator_is_not_the_driver(self, client):
        payload = client.get("/api/bookings/b1/ticket").json()["qrPayload"]

        r = client.post("/api/tickets/validate", json={"payload": payload, "validatorUserId": 7})

        assert r.status_code == 200
        assert r.json()["reason"] == "Ticket belongs to another driver"

    def test_scan_marks_booking_scanned(self, client):
        assert client.get("/api/bookings/b1").json()["scanned"] is False
        payload = client.get("/api/bookings/b1/ticket").json()["qrPayload"]

        client.post("/api/tickets/validate", json={"payload": payload, "validatorUserId": "u_driver_1"})

        assert client.get("/api/bookings/b1").json()["scanned"] is True

    def test_ticket_for_unknown_booking(self, client):
        r = client.get("/api/bookings/b_missing/ticket")
        assert r.status_code == 404
        assert r.json() == {"error": "Ticket not found"}


class TestDisputes:
    def test_patch_resolves(self, client):
        r = client.patch("/api/disputes/d1", json={"status": "resolved", "resolution": "refunded", "resolvedBy": "admin"})

        assert r.status_code == 200
        body = r.json()
        assert body["status"] == "resolved"
        assert body["resolvedBy"] == "admin"
        assert body["resolvedAt"] is not None

    def test_patch_unknown_dispute(self, client):
        r = client.patch("/api/disputes/d_missing", json={"status": "open"})
        assert r.status_code == 404
        assert r.json() == {"error": "Dispute not found"}

    def test_agency_scope(self, client):
        assert client.get("/api/disputes", params={"agencyId": "u_agency_1"}).json() == []
        assert len(client.get("/api/disputes").json()) == 3
        assert client.get("/api/disputes/d1", params={"agencyId": "u_agency_1"}).status_code == 404

    def test_review_then_resolve(self, client):
        assert client.post("/api/disputes/d1/review").json()["status"] == "in_review"

        r = client.post("/api/disputes/d1/resolve", json={"resolution": "Refund issued", "resolvedBy": "ops"})
        assert r.json()["status"] == "resolved"

    def test_reopening_drops_resolution(self, client):
        r = client.patch("/api/disputes/d3", json={"status": "open"})

        assert r.status_code == 200
        body = r.json()
        assert body["status"] == "open"
        assert body["resolution"] is None
        assert body["resolvedBy"] is None
        assert body["resolvedAt"] is None


class TestRatingsAndNotifications:
    def test_rating_upsert_status_codes(self, client):
        r = client.post("/api/ratings", json={"bookingId": "b4", "passengerId": "u_passenger_2", "score": 5})
        assert r.status_code == 200

        client.put("/api/bookings/b1/status", json={"status": "completed", "actorId": "u_driver_1"})
        r = client.post("/api/ratings", json={"bookingId": "b1", "passengerId": "u_passenger_1", "score": 4})
        assert r.status_code == 201

        assert client.get("/api/ratings/driver/u_driver_1/summary").json() == {"average": 4.5, "count": 2}
        assert client.get("/api/bookings/b1/rating").json()["score"] == 4

    def test_booking_without_rating(self, client):
        r = client.get("/api/bookings/b1/rating")
        assert r.status_code == 200
        assert r.json() is None

    def test_rating_errors(self, client):
        r = client.post("/api/ratings", json={"bookingId": "b1", "passengerId": "u_passenger_1", "score": 5})
        assert r.status_code == 400
        assert r.json() == {"error": "Driver can only be rated after trip completion"}

    def test_driver_notifications(self, client):
        client.post("/api/bookings", json={"tripId": "t1", "passenger": "u_passenger_2", "seats": 1, "paymentMethod": "cash"})

        notices = client.get("/api/notifications/driver/u_driver_1").json()
        assert len(notices) == 1
        assert notices[0]["read"] is False

        assert client.post("/api/notifications/driver/u_driver_1/read").json() == {"ok": True, "updated": 1}
        assert client.get("/api/notifications/driver/u_driver_1").json()[0]["read"] is True


class TestDriverDashboard:
    def test_activity_summary(self, client):
        r = client.get("/api/driver/activity-summary", params={"userId": "u_driver_1"})
        assert r.json()["bookingsCount"] == 4

    def test_scanner_report_rejects_unknown_period(self, client):
        r = client.get("/api/scanner/report", params={"userId": "u_scanner_1", "period": "someday"})
        assert r.status_code == 400

    def test_scanner_count_increment(self, client):
        assert client.post("/api/scanner/count/increment", json={"userId": "u_scanner_1"}).json() == 1
        assert client.post("/api/scanner/count/increment", params={"userId": "u_scanner_1"}).json() == 2
        assert client.get("/api/scanner/count", params={"userId": "u_scanner_1"}).json() == 2

    def test_scanner_count_increment_without_user(self, client):
        r = client.post("/api/scanner/count/increment")

        assert r.status_code == 200
        assert r.json() == 0


class TestAuditTrail:
    def test_booking_actions_are_listed(self, client):
        booking = client.post("/api/bookings", json={
            "tripId": "t1", "passenger": "u_passenger_2", "seats": 1, "paymentMethod": "cash",
        }).json()
        client.post(f"/api/bookings/{booking['id']}/cancel", json={"passengerId": "u_passenger_2"})

        entries = client.get(f"/api/audit/booking/{booking['id']}").json()

        assert [e["action"] for e in entries] == ["booking.create", "booking.cancel"]
        assert entries[0]["actorId"] == "u_passenger_2"
        assert entries[0]["details"]["seats"] == 1
        assert entries[1]["createdAt"].endswith("Z")

    def test_entity_without_history(self, client):
        assert client.get("/api/audit/trip/t1").json() == []
