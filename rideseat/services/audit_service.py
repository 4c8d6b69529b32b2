import uuid

from loguru import logger

from rideseat.core.clock import utcnow
from rideseat.db.store import Store
from rideseat.models.audit_log import AuditLog

def log_audit(store: Store, actor_id: str, action: str, entity_type: str, entity_id: str, details: dict | None = None) -> AuditLog:
    entry = AuditLog(
        id=str(uuid.uuid4()),
        actor_id=actor_id or "system",
        action=action,
        entity_type=entity_type,
        entity_id=entity_id,
        created_at=utcnow(),
        details=dict(details or {}),
    )
    store.audit_logs.append(entry)
    logger.bind(audit=True).info("audit {} {}:{} by {} {}", action, entity_type, entity_id, entry.actor_id, entry.details)
    return entry

def audit_trail(store: Store, entity_type: str, entity_id: str) -> list[AuditLog]:
    """Audit entries recorded against one entity, oldest first."""
    with store.transaction():
        return [a for a in store.audit_logs if a.entity_type == entity_type and a.entity_id == entity_id]
