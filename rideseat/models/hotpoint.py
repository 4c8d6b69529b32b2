from dataclasses import dataclass

@dataclass
class Hotpoint:
    id: str
    name: str
    address: str = ""
    latitude: float = 0.0
    longitude: float = 0.0
    country: str = ""
