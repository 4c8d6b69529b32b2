"""Unit tests for seat accounting on a single trip."""

import pytest

from rideseat.core.errors import ConflictError
from rideseat.models.trip import Trip, TRIP_ACTIVE, TRIP_FULL, TRIP_COMPLETED, TRIP_CANCELLED
from rideseat.services import inventory_service


def make_trip(seats: int = 3, capacity: int | None = None, status: str = TRIP_ACTIVE) -> Trip:
    return Trip(
        id="t_test",
        departure_hotpoint_id="hp1",
        destination_hotpoint_id="hp2",
        driver_id="u_driver_1",
        vehicle_id="v1",
        seats_available=seats,
        capacity=seats if capacity is None else capacity,
        status=status,
    )


class TestReserve:
    def test_partial_reservation_keeps_trip_active(self):
        trip = make_trip(seats=3)

        assert inventory_service.reserve(trip, 1, False) == 1
        assert trip.seats_available == 2
        assert trip.status == TRIP_ACTIVE

    def test_last_seats_mark_trip_full(self):
        trip = make_trip(seats=2)

        inventory_service.reserve(trip, 2, False)

        assert trip.seats_available == 0
        assert trip.status == TRIP_FULL

    def test_full_car_claims_every_remaining_seat(self):
        """The requested count is ignored for a full-car request."""
        trip = make_trip(seats=3)

        granted = inventory_service.reserve(trip, 1, True)

        assert granted == 3
        assert trip.seats_available == 0
        assert trip.status == TRIP_FULL

    @pytest.mark.parametrize("requested", [0, 4, 10])
    def test_rejected_request_leaves_trip_untouched(self, requested):
        trip = make_trip(seats=3)

        with pytest.raises(ConflictError, match="Not enough seats available"):
            inventory_service.reserve(trip, requested, False)

        assert trip.seats_available == 3
        assert trip.status == TRIP_ACTIVE

    def test_full_car_on_empty_trip_is_rejected(self):
        trip = make_trip(seats=0, capacity=4, status=TRIP_FULL)

        with pytest.raises(ConflictError):
            inventory_service.reserve(trip, 1, True)


class TestRelease:
    def test_release_reopens_full_trip(self):
        trip = make_trip(seats=0, capacity=2, status=TRIP_FULL)

        inventory_service.release(trip, 1)

        assert trip.seats_available == 1
        assert trip.status == TRIP_ACTIVE

    @pytest.mark.parametrize("status", [TRIP_COMPLETED, TRIP_CANCELLED])
    def test_release_does_not_resurrect_closed_trip(self, status):
        trip = make_trip(seats=0, capacity=2, status=status)

        inventory_service.release(trip, 2)

        assert trip.seats_available == 2
        assert trip.status == status

    def test_release_beyond_capacity_is_rejected(self):
        trip = make_trip(seats=2, capacity=3)

        with pytest.raises(ConflictError, match="exceeds trip capacity"):
            inventory_service.release(trip, 2)

        assert trip.seats_available == 2

    def test_release_of_nothing_is_a_no_op(self):
        trip = make_trip(seats=0, capacity=2, status=TRIP_FULL)

        inventory_service.release(trip, 0)

        assert trip.seats_available == 0
        assert trip.status == TRIP_FULL

    def test_reserve_then_release_restores_inventory(self):
        trip = make_trip(seats=4)

        granted = inventory_service.reserve(trip, 3, False)
        inventory_service.release(trip, granted)

        assert trip.seats_available == 4
        assert trip.status == TRIP_ACTIVE


class TestDeriveStatus:
    def test_active_request_on_empty_trip_becomes_full(self):
        assert inventory_service.derive_status(make_trip(seats=0, capacity=3), TRIP_ACTIVE) == TRIP_FULL

    def test_full_request_on_trip_with_seats_becomes_active(self):
        assert inventory_service.derive_status(make_trip(seats=2), TRIP_FULL) == TRIP_ACTIVE

    def test_terminal_status_passes_through(self):
        assert inventory_service.derive_status(make_trip(seats=2), TRIP_COMPLETED) == TRIP_COMPLETED
