from fastapi import APIRouter, Depends
from rideseat.api.deps import Store, get_store
from rideseat.services.audit_service import audit_trail
from rideseat.services.hydrate import audit_out

router = APIRouter(tags=["audit"])


@router.get("/audit/{entity_type}/{entity_id}")
def read_audit_trail(entity_type: str, entity_id: str, store: Store = Depends(get_store)):
    """Recorded actions on one trip, booking, dispute or rating, oldest first."""
    return [audit_out(a) for a in audit_trail(store, entity_type, entity_id)]
