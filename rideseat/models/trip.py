from dataclasses import dataclass, field

TRIP_ACTIVE = "active"
TRIP_FULL = "full"
TRIP_COMPLETED = "completed"
TRIP_CANCELLED = "cancelled"
TRIP_STATUSES = (TRIP_ACTIVE, TRIP_FULL, TRIP_COMPLETED, TRIP_CANCELLED)

PAYMENT_CASH = "cash"
PAYMENT_MOBILE_MONEY = "mobile_money"
PAYMENT_CARD = "card"
PAYMENT_METHODS = (PAYMENT_CASH, PAYMENT_MOBILE_MONEY, PAYMENT_CARD)

TRIP_TYPES = ("insta", "scheduled")

@dataclass
class Trip:
    id: str
    departure_hotpoint_id: str
    destination_hotpoint_id: str
    driver_id: str
    vehicle_id: str
    seats_available: int
    capacity: int  # fixed at creation; seats_available never exceeds it
    price_per_seat: int = 0
    allow_full_car: bool = False
    payment_methods: list[str] = field(default_factory=lambda: list(PAYMENT_METHODS))
    status: str = TRIP_ACTIVE  # active|full|completed|cancelled
    type: str = "insta"        # insta|scheduled
    departure_date: str | None = None  # YYYY-MM-DD
    departure_time: str = "09:00"      # HH:MM
    arrival_time: str | None = None    # HH:MM
    duration_minutes: int | None = None
