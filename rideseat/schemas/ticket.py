from pydantic import BaseModel
from typing import Any, Optional

class TicketValidateIn(BaseModel):
    # scanners may send anything; a payload that is not a ticket string is reported as malformed
    payload: Optional[Any] = None
    validatorUserId: Optional[Any] = None
