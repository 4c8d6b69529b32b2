from typing import Optional
from fastapi import APIRouter, Depends
from rideseat.api.deps import Store, get_store
from rideseat.schemas.scanner import ScannerCountIn
from rideseat.services.activity_service import (
    PERIOD_TODAY, driver_activities, driver_activity_summary, increment_scanner_count, scanner_count, scanner_report,
)

router = APIRouter(tags=["driver"])


@router.get("/driver/activities")
def activities(userId: str, store: Store = Depends(get_store)):
    return driver_activities(store, userId)


@router.get("/driver/activity-summary")
def activity_summary(userId: str, store: Store = Depends(get_store)):
    return driver_activity_summary(store, userId)


@router.get("/scanner/count")
def read_scanner_count(userId: str = "", store: Store = Depends(get_store)):
    return scanner_count(store, userId)


@router.post("/scanner/count/increment")
def bump_scanner_count(
    body: Optional[ScannerCountIn] = None,
    userId: Optional[str] = None,
    store: Store = Depends(get_store),
):
    """Manual check-in: userId comes from the body, or the query string."""
    user_id = (body.userId if body else None) or userId
    return increment_scanner_count(store, user_id)


@router.get("/scanner/report")
def read_scanner_report(userId: str, period: str = PERIOD_TODAY, store: Store = Depends(get_store)):
    return scanner_report(store, userId, period)
