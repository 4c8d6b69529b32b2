from dataclasses import dataclass, field

AGENCY_MANAGER = "agency_manager"
AGENCY_SCANNER = "agency_scanner"

@dataclass
class User:
    id: str
    name: str
    email: str = ""
    phone: str = ""
    roles: list[str] = field(default_factory=lambda: ["passenger"])  # passenger, driver, agency
    rating: float = 5.0
    status_badge: str = "Traveler"
    avatar_uri: str | None = None
    agency_sub_role: str | None = None  # agency_manager|agency_scanner
    agency_id: str | None = None        # set for agency scanners: the agency (driver) they scan for

    @property
    def is_agency_scanner(self) -> bool:
        return self.agency_sub_role == AGENCY_SCANNER and bool(self.agency_id)

    @property
    def operator_id(self) -> str:
        """Driver id this user acts for: the agency for a scanner, the user itself otherwise."""
        return self.agency_id if self.is_agency_scanner else self.id
