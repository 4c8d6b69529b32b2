"""Complaint lifecycle: open -> in_review -> resolved, or open -> resolved.

`patch_dispute` is the operator override used by the admin console and may
set any status directly. Moving a dispute out of `resolved` drops its resolution.
"""

from loguru import logger

from rideseat.core.clock import utcnow
from rideseat.core.errors import ConflictError, NotFoundError, ValidationError
from rideseat.db.store import Store
from rideseat.models.dispute import Dispute, DISPUTE_OPEN, DISPUTE_IN_REVIEW, DISPUTE_RESOLVED, DISPUTE_STATUSES
from rideseat.services.audit_service import log_audit
from rideseat.services.hydrate import driver_id_of


def in_scope(store: Store, dispute: Dispute, agency_id: str | None) -> bool:
    """Unscoped (system) callers see everything; an agency sees disputes on its own trips."""
    if not agency_id:
        return True
    booking = store.find_booking(dispute.booking_id)
    return bool(booking and driver_id_of(store, booking) == agency_id)


def list_disputes(store: Store, agency_id: str | None = None) -> list[Dispute]:
    with store.transaction():
        items = [d for d in store.disputes.values() if in_scope(store, d, agency_id)]
    return sorted(items, key=lambda d: d.created_at, reverse=True)


def get_dispute(store: Store, dispute_id: str, agency_id: str | None = None) -> Dispute:
    d = store.find_dispute(dispute_id)
    if not d or not in_scope(store, d, agency_id):
        raise NotFoundError("Dispute not found")
    return d


def _apply_resolution(d: Dispute, resolution: str | None, resolved_by: str | None) -> None:
    resolution = (resolution or "").strip()
    resolved_by = (resolved_by or "").strip()
    if not resolution:
        raise ValidationError("Resolution is required")
    if not resolved_by:
        raise ValidationError("resolvedBy is required")
    d.status = DISPUTE_RESOLVED
    d.resolution = resolution
    d.resolved_by = resolved_by
    d.resolved_at = utcnow()


def start_review(store: Store, dispute_id: str, actor_id: str = "admin") -> Dispute:
    with store.transaction():
        d = get_dispute(store, dispute_id)
        if d.status != DISPUTE_OPEN:
            raise ConflictError("Only open disputes can be put in review")
        d.status = DISPUTE_IN_REVIEW
        log_audit(store, actor_id, "dispute.review", "dispute", d.id)
    logger.info("dispute {} in review", d.id)
    return d


def resolve_dispute(store: Store, dispute_id: str, resolution: str, resolved_by: str) -> Dispute:
    with store.transaction():
        d = get_dispute(store, dispute_id)
        if d.status == DISPUTE_RESOLVED:
            raise ConflictError("Dispute is already resolved")
        _apply_resolution(d, resolution, resolved_by)
        log_audit(store, d.resolved_by, "dispute.resolve", "dispute", d.id, {"resolution": d.resolution})
    logger.info("dispute {} resolved by {}", d.id, d.resolved_by)
    return d


def patch_dispute(store: Store, dispute_id: str, status: str | None = None, resolution: str | None = None,
                  resolved_by: str | None = None, agency_id: str | None = None) -> Dispute:
    if status is not None and status not in DISPUTE_STATUSES:
        raise ValidationError(f"Dispute status must be one of: {', '.join(DISPUTE_STATUSES)}")
    if resolution is not None and status not in (None, DISPUTE_RESOLVED):
        raise ValidationError("A resolution can only be recorded when resolving")

    with store.transaction():
        d = get_dispute(store, dispute_id, agency_id)
        previous = d.status
        if resolution is not None:
            _apply_resolution(d, resolution, resolved_by)
        elif status is not None:
            d.status = status
            if status == DISPUTE_RESOLVED:
                if d.resolved_at is None:
                    d.resolved_at = utcnow()
                    d.resolved_by = (resolved_by or "").strip() or d.resolved_by
            else:
                # a reopened dispute carries no resolution
                d.resolution = None
                d.resolved_by = None
                d.resolved_at = None
        log_audit(store, resolved_by or "admin", "dispute.patch", "dispute", d.id, {"from": previous, "to": d.status})
    logger.info("dispute {} patched: {} -> {}", d.id, previous, d.status)
    return d
