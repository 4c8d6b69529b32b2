from pydantic import BaseModel
from typing import Any, Dict, Optional, Union

class BookingCreate(BaseModel):
    tripId: str = ""
    # a user id, or a literal passenger object {id?, name, phone?, email?}
    passenger: Optional[Union[str, Dict[str, Any]]] = None
    # range and payment method checks are made by the booking service, in order
    seats: Optional[int] = None
    paymentMethod: Optional[str] = None
    isFullCar: bool = False

class BookingCancel(BaseModel):
    passengerId: Optional[str] = None

class BookingStatusIn(BaseModel):
    status: str
    actorId: str = ""
