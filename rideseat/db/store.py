"""In-memory entity store.

The store is the single owner of all mutable state. Every service entry point
takes a `Store` explicitly. Mutations and reads that walk the collections run
inside `store.transaction()`, which holds one store-wide re-entrant lock;
FastAPI serves sync endpoints from its threadpool.
"""

import threading
from contextlib import contextmanager
from datetime import datetime
from typing import Iterator

from rideseat.models.audit_log import AuditLog
from rideseat.models.booking import Booking
from rideseat.models.dispute import Dispute
from rideseat.models.hotpoint import Hotpoint
from rideseat.models.notification import DriverNotification
from rideseat.models.rating import Rating
from rideseat.models.trip import Trip
from rideseat.models.user import User
from rideseat.models.vehicle import Vehicle


class Store:
    def __init__(self) -> None:
        self._lock = threading.RLock()
        self.reset()

    def reset(self) -> None:
        with self._lock:
            self.hotpoints: dict[str, Hotpoint] = {}
            self.users: dict[str, User] = {}
            self.vehicles: dict[str, Vehicle] = {}
            # insertion order is publication order; newest trips are listed first
            self.trips: dict[str, Trip] = {}
            self.bookings: dict[str, Booking] = {}
            self.disputes: dict[str, Dispute] = {}
            self.ratings: dict[str, Rating] = {}  # keyed by booking id, one rating per booking
            self.driver_notifications: list[DriverNotification] = []
            self.audit_logs: list[AuditLog] = []
            # scanned markers: booking id -> first successful scan; never cleared
            self.scanned: dict[str, datetime] = {}
            self.scan_counts: dict[str, int] = {}

    @contextmanager
    def transaction(self) -> Iterator["Store"]:
        with self._lock:
            yield self

    def add_hotpoint(self, hotpoint: Hotpoint) -> Hotpoint:
        self.hotpoints[hotpoint.id] = hotpoint
        return hotpoint

    def add_user(self, user: User) -> User:
        self.users[user.id] = user
        return user

    def add_vehicle(self, vehicle: Vehicle) -> Vehicle:
        self.vehicles[vehicle.id] = vehicle
        return vehicle

    def add_trip(self, trip: Trip) -> Trip:
        self.trips[trip.id] = trip
        return trip

    def add_booking(self, booking: Booking) -> Booking:
        self.bookings[booking.id] = booking
        return booking

    def add_dispute(self, dispute: Dispute) -> Dispute:
        self.disputes[dispute.id] = dispute
        return dispute

    def find_hotpoint(self, hotpoint_id: str | None) -> Hotpoint | None:
        return self.hotpoints.get(hotpoint_id) if hotpoint_id else None

    def find_user(self, user_id: str | None) -> User | None:
        return self.users.get(user_id) if user_id else None

    def find_vehicle(self, vehicle_id: str | None) -> Vehicle | None:
        return self.vehicles.get(vehicle_id) if vehicle_id else None

    def find_trip(self, trip_id: str | None) -> Trip | None:
        return self.trips.get(trip_id) if trip_id else None

    def find_booking(self, booking_id: str | None) -> Booking | None:
        return self.bookings.get(booking_id) if booking_id else None

    def find_dispute(self, dispute_id: str | None) -> Dispute | None:
        return self.disputes.get(dispute_id) if dispute_id else None

    def bookings_for_trip(self, trip_id: str, include_cancelled: bool = False) -> list[Booking]:
        with self._lock:
            return [
                b for b in self.bookings.values()
                if b.trip_id == trip_id and (include_cancelled or b.status != "cancelled")
            ]

    def is_scanned(self, booking_id: str) -> bool:
        return booking_id in self.scanned


store = Store()


def get_store() -> Store:
    return store
