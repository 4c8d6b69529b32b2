from dataclasses import dataclass, field
from datetime import datetime

@dataclass
class AuditLog:
    id: str
    actor_id: str
    action: str
    entity_type: str
    entity_id: str
    created_at: datetime
    details: dict = field(default_factory=dict)
