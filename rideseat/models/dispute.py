from dataclasses import dataclass
from datetime import datetime

DISPUTE_OPEN = "open"
DISPUTE_IN_REVIEW = "in_review"
DISPUTE_RESOLVED = "resolved"
DISPUTE_STATUSES = (DISPUTE_OPEN, DISPUTE_IN_REVIEW, DISPUTE_RESOLVED)

DISPUTE_TYPES = ("payment", "cancellation", "other")

@dataclass
class Dispute:
    id: str
    booking_id: str
    reporter_id: str
    type: str    # payment|cancellation|other
    status: str  # open|in_review|resolved
    description: str
    created_at: datetime
    trip_id: str | None = None
    resolution: str | None = None
    resolved_by: str | None = None
    resolved_at: datetime | None = None
