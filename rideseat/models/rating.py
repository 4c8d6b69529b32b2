from dataclasses import dataclass
from datetime import datetime

@dataclass
class Rating:
    id: str
    booking_id: str
    driver_id: str
    passenger_id: str
    score: int  # 1..5
    created_at: datetime
    comment: str | None = None
