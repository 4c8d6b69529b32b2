from dataclasses import dataclass
from datetime import datetime

@dataclass
class DriverNotification:
    id: str
    driver_id: str
    booking_id: str
    trip_id: str
    passenger_name: str
    seats: int
    created_at: datetime
    type: str = "booking"
    read: bool = False
