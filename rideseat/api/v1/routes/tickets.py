from typing import Optional
from fastapi import APIRouter, Depends
from rideseat.api.deps import Store, get_store
from rideseat.schemas.ticket import TicketValidateIn
from rideseat.services.ticket_service import validate_ticket

router = APIRouter(tags=["tickets"])


@router.post("/tickets/validate")
def validate(body: Optional[TicketValidateIn] = None, store: Store = Depends(get_store)):
    """Always 200: an invalid ticket is reported in the body, not as an HTTP error."""
    payload = body.payload if body else None
    validator = body.validatorUserId if body else None
    return validate_ticket(store, payload, str(validator) if validator is not None else None).as_dict()
