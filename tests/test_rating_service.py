"""Driver ratings. Seed: r_b3 (u_driver_2, 5) and r_b4 (u_driver_1, 4)."""

import pytest

from rideseat.core.errors import ConflictError, ForbiddenError, NotFoundError, ValidationError
from rideseat.services.rating_service import driver_rating_summary, get_booking_rating, rate_driver


class TestRateDriver:
    def test_rating_replaces_previous_one_for_booking(self, store):
        rating, created = rate_driver(store, "b4", "u_passenger_2", 2, "  Late pickup  ")

        assert created is False
        assert rating.id == "r_b4"
        assert rating.comment == "Late pickup"
        assert driver_rating_summary(store, "u_driver_1") == {"average": 2, "count": 1}
        assert store.users["u_driver_1"].rating == 2

    def test_first_rating_is_created(self, store):
        del store.ratings["b3"]

        rating, created = rate_driver(store, "b3", "u_passenger_1", 4)

        assert created is True
        assert rating.driver_id == "u_driver_2"
        assert get_booking_rating(store, "b3") is rating

    def test_average_is_rounded_to_one_decimal(self, store):
        store.bookings["b1"].status = "completed"

        rate_driver(store, "b1", "u_passenger_1", 5)

        # (4 + 5) / 2
        assert driver_rating_summary(store, "u_driver_1") == {"average": 4.5, "count": 2}
        assert store.users["u_driver_1"].rating == 4.5

    def test_unknown_booking(self, store):
        with pytest.raises(NotFoundError):
            rate_driver(store, "b_missing", "u_passenger_1", 5)

    def test_only_booking_passenger_may_rate(self, store):
        with pytest.raises(ForbiddenError, match="Only the booking passenger can rate this driver"):
            rate_driver(store, "b4", "u_passenger_1", 5)

    def test_trip_must_be_completed(self, store):
        with pytest.raises(ConflictError, match="Driver can only be rated after trip completion"):
            rate_driver(store, "b1", "u_passenger_1", 5)

    @pytest.mark.parametrize("score", [0, 6, None])
    def test_score_range(self, store, score):
        with pytest.raises(ValidationError, match="between 1 and 5"):
            rate_driver(store, "b4", "u_passenger_2", score)

    def test_summary_without_ratings(self, store):
        assert driver_rating_summary(store, "u_driver_3") == {"average": 0, "count": 0}
