from typing import Optional
from fastapi import APIRouter, Depends
from rideseat.api.deps import Store, agency_scope, get_store
from rideseat.schemas.dispute import DisputePatch, DisputeResolveIn
from rideseat.services.dispute_service import (
    get_dispute, list_disputes, patch_dispute, resolve_dispute, start_review,
)
from rideseat.services.hydrate import dispute_out

router = APIRouter(tags=["disputes"])


@router.get("/disputes")
def read_disputes(agency_id: Optional[str] = Depends(agency_scope), store: Store = Depends(get_store)):
    with store.transaction():
        return [dispute_out(d) for d in list_disputes(store, agency_id)]


@router.get("/disputes/{dispute_id}")
def read_dispute(dispute_id: str, agency_id: Optional[str] = Depends(agency_scope), store: Store = Depends(get_store)):
    with store.transaction():
        return dispute_out(get_dispute(store, dispute_id, agency_id))


@router.patch("/disputes/{dispute_id}")
def update_dispute(
    dispute_id: str,
    body: DisputePatch,
    agency_id: Optional[str] = Depends(agency_scope),
    store: Store = Depends(get_store),
):
    with store.transaction():
        d = patch_dispute(store, dispute_id, status=body.status, resolution=body.resolution,
                          resolved_by=body.resolvedBy, agency_id=agency_id)
        return dispute_out(d)


@router.post("/disputes/{dispute_id}/review")
def review_dispute(dispute_id: str, store: Store = Depends(get_store)):
    with store.transaction():
        return dispute_out(start_review(store, dispute_id))


@router.post("/disputes/{dispute_id}/resolve")
def close_dispute(dispute_id: str, body: DisputeResolveIn, store: Store = Depends(get_store)):
    with store.transaction():
        return dispute_out(resolve_dispute(store, dispute_id, body.resolution, body.resolvedBy))
