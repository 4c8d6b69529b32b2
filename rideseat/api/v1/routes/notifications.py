from fastapi import APIRouter, Depends
from rideseat.api.deps import Store, get_store
from rideseat.services.hydrate import notification_out
from rideseat.services.notification_service import list_driver_notifications, mark_driver_notifications_read

router = APIRouter(tags=["notifications"])


@router.get("/notifications/driver/{driver_id}")
def read_notifications(driver_id: str, store: Store = Depends(get_store)):
    with store.transaction():
        return [notification_out(n) for n in list_driver_notifications(store, driver_id)]


@router.post("/notifications/driver/{driver_id}/read")
def mark_read(driver_id: str, store: Store = Depends(get_store)):
    with store.transaction():
        return {"ok": True, "updated": mark_driver_notifications_read(store, driver_id)}
