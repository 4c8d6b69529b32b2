from pydantic import BaseModel
from typing import Optional

class RatingIn(BaseModel):
    bookingId: str
    passengerId: str
    score: Optional[int] = None
    comment: Optional[str] = None

class RatingSummaryOut(BaseModel):
    average: float = 0
    count: int = 0
