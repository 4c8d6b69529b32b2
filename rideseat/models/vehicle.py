from dataclasses import dataclass

@dataclass
class Vehicle:
    id: str
    make: str
    model: str
    color: str = ""
    license_plate: str = ""
    seats: int = 4
    approval_status: str = "pending"  # pending|approved|rejected
    driver_id: str = ""
    owner_id: str | None = None
