from typing import Optional

from fastapi import Query

from rideseat.db.store import Store, get_store

__all__ = ["Store", "get_store", "agency_scope"]


def agency_scope(agencyId: Optional[str] = Query(default=None)) -> Optional[str]:
    """Agency id an admin request is limited to; None means the system-wide view."""
    return (agencyId or "").strip() or None
