from typing import Optional
from fastapi import APIRouter, Depends, Query
from rideseat.api.deps import Store, get_store
from rideseat.schemas.trip import TripCreate, TripSeriesCreate, TripStatusIn
from rideseat.services.hydrate import trip_out
from rideseat.services.trip_service import (
    get_trip, list_driver_trips, publish_trip, publish_trip_series, search_trips, set_trip_status,
)

router = APIRouter(tags=["trips"])


@router.get("/trips")
def list_trips(
    fromId: Optional[str] = None,
    toId: Optional[str] = None,
    date: Optional[str] = None,
    trip_type: Optional[str] = Query(default=None, alias="type"),
    store: Store = Depends(get_store),
):
    """Bookable trips, newest first."""
    with store.transaction():
        return [trip_out(store, t) for t in search_trips(store, fromId, toId, date, trip_type)]


@router.get("/trips/driver/{user_id}")
def driver_trips(user_id: str, store: Store = Depends(get_store)):
    with store.transaction():
        return [trip_out(store, t) for t in list_driver_trips(store, user_id)]


@router.get("/trips/{trip_id}")
def read_trip(trip_id: str, store: Store = Depends(get_store)):
    with store.transaction():
        return trip_out(store, get_trip(store, trip_id))


@router.post("/trips", status_code=201)
def create_trip(body: TripCreate, store: Store = Depends(get_store)):
    with store.transaction():
        trip = publish_trip(
            store,
            driver_id=body.driverId,
            vehicle_id=body.vehicleId,
            departure_hotpoint_id=body.departureHotpointId,
            destination_hotpoint_id=body.destinationHotpointId,
            seats_available=body.seatsAvailable,
            price_per_seat=body.pricePerSeat,
            allow_full_car=body.allowFullCar,
            payment_methods=body.paymentMethods,
            trip_type=body.type,
            departure_date=body.departureDate,
            departure_time=body.departureTime,
            arrival_time=body.arrivalTime,
            duration_minutes=body.durationMinutes,
        )
        return trip_out(store, trip)


@router.post("/trips/bulk", status_code=201)
def create_trip_series(body: TripSeriesCreate, store: Store = Depends(get_store)):
    """One scheduled trip per departure slot between startTime and endTime."""
    base = body.baseTripData
    with store.transaction():
        trips = publish_trip_series(
            store,
            driver_id=base.driverId,
            vehicle_id=base.vehicleId,
            departure_hotpoint_id=base.departureHotpointId,
            destination_hotpoint_id=base.destinationHotpointId,
            departure_date=body.departureDate,
            start_time=body.startTime,
            interval_minutes=body.intervalMinutes,
            end_time=body.endTime,
            duration_minutes=base.durationMinutes,
            seats_available=base.seatsAvailable,
            price_per_seat=base.pricePerSeat,
            allow_full_car=base.allowFullCar,
            payment_methods=base.paymentMethods,
            trip_type=base.type,
        )
        return [trip_out(store, t) for t in trips]


@router.put("/trips/{trip_id}/status")
def update_trip_status(trip_id: str, body: TripStatusIn, store: Store = Depends(get_store)):
    with store.transaction():
        return trip_out(store, set_trip_status(store, trip_id, body.status, body.actorId))
