from dataclasses import dataclass
from datetime import datetime

BOOKING_UPCOMING = "upcoming"
BOOKING_ONGOING = "ongoing"
BOOKING_COMPLETED = "completed"
BOOKING_CANCELLED = "cancelled"
# forward order of the non-cancelled states
BOOKING_FLOW = (BOOKING_UPCOMING, BOOKING_ONGOING, BOOKING_COMPLETED)

PAYMENT_CASH_ON_PICKUP = "cash_on_pickup"
PAYMENT_PAID = "paid"

@dataclass(frozen=True)
class TripSnapshot:
    """Copy of the trip taken right after the booking's seats were reserved."""

    trip_id: str
    departure_hotpoint_id: str
    destination_hotpoint_id: str
    driver_id: str
    vehicle_id: str
    seats_available: int
    status: str
    price_per_seat: int
    departure_date: str | None
    departure_time: str


@dataclass(frozen=True)
class GuestPassenger:
    """Passenger given inline on the booking request rather than as a known user id."""

    id: str
    name: str = ""
    phone: str = ""
    email: str = ""


@dataclass
class Booking:
    id: str
    trip_id: str
    passenger_id: str
    seats: int
    payment_method: str
    is_full_car: bool
    status: str  # upcoming|ongoing|completed|cancelled
    created_at: datetime
    trip_snapshot: TripSnapshot
    ticket_id: str
    ticket_number: str
    ticket_issued_at: datetime
    payment_status: str  # cash_on_pickup|paid
    payment_reference: str | None = None
    guest_passenger: GuestPassenger | None = None
