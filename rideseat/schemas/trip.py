from pydantic import BaseModel
from typing import List, Optional

class TripCreate(BaseModel):
    driverId: str
    vehicleId: str
    departureHotpointId: str
    destinationHotpointId: str
    seatsAvailable: int = 4
    pricePerSeat: int = 0
    allowFullCar: bool = False
    paymentMethods: Optional[List[str]] = None
    type: str = "insta"
    departureDate: Optional[str] = None
    departureTime: str = "09:00"
    arrivalTime: Optional[str] = None
    durationMinutes: Optional[int] = None

class TripStatusIn(BaseModel):
    status: str
    actorId: Optional[str] = None

class TripSeriesTemplate(BaseModel):
    driverId: str
    vehicleId: str
    departureHotpointId: str
    destinationHotpointId: str
    seatsAvailable: int = 4
    pricePerSeat: int = 0
    allowFullCar: bool = False
    paymentMethods: Optional[List[str]] = None
    type: str = "scheduled"
    durationMinutes: int = 180

class TripSeriesCreate(BaseModel):
    baseTripData: TripSeriesTemplate
    departureDate: Optional[str] = None
    startTime: str = "06:00"
    intervalMinutes: int = 60
    endTime: Optional[str] = None
