from typing import Optional
from fastapi import APIRouter, Depends
from rideseat.api.deps import Store, get_store
from rideseat.core.errors import NotFoundError
from rideseat.services.hydrate import hotpoint_out, user_out, vehicle_out
from rideseat.services.trip_service import list_hotpoints, list_vehicles_for_user

router = APIRouter(tags=["public"])


@router.get("/health")
def health():
    return {"ok": True}


@router.get("/hotpoints")
def get_hotpoints(store: Store = Depends(get_store)):
    return [hotpoint_out(h) for h in list_hotpoints(store)]


@router.get("/users/{user_id}")
def get_user(user_id: str, store: Store = Depends(get_store)):
    with store.transaction():
        user = store.find_user(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user_out(user)


@router.get("/vehicles")
def get_vehicles(userId: Optional[str] = None, store: Store = Depends(get_store)):
    """Vehicles of a driver or agency. Agency scanners see their agency's fleet."""
    with store.transaction():
        return [vehicle_out(v) for v in list_vehicles_for_user(store, userId)]
