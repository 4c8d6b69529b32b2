from typing import Optional
from fastapi import APIRouter, Depends
from rideseat.api.deps import Store, get_store
from rideseat.schemas.booking import BookingCancel, BookingCreate, BookingStatusIn
from rideseat.services.booking_service import (
    advance_booking_status, cancel_booking, create_booking, get_booking, list_bookings,
)
from rideseat.services.hydrate import booking_out, rating_out
from rideseat.services.rating_service import get_booking_rating
from rideseat.services.ticket_service import ticket_view

router = APIRouter(tags=["bookings"])


@router.get("/bookings")
def read_bookings(userId: Optional[str] = None, store: Store = Depends(get_store)):
    with store.transaction():
        return [booking_out(store, b) for b in list_bookings(store, userId)]


@router.post("/bookings", status_code=201)
def create_public_booking(body: BookingCreate, store: Store = Depends(get_store)):
    with store.transaction():
        booking = create_booking(
            store,
            trip_id=body.tripId,
            passenger=body.passenger,
            seats=body.seats,
            payment_method=body.paymentMethod,
            is_full_car=body.isFullCar,
        )
        return booking_out(store, booking)


@router.get("/bookings/{booking_id}")
def read_booking(booking_id: str, store: Store = Depends(get_store)):
    with store.transaction():
        return booking_out(store, get_booking(store, booking_id))


@router.post("/bookings/{booking_id}/cancel")
def cancel(booking_id: str, body: Optional[BookingCancel] = None, store: Store = Depends(get_store)):
    passenger_id = body.passengerId if body else None
    with store.transaction():
        return booking_out(store, cancel_booking(store, booking_id, passenger_id))


@router.put("/bookings/{booking_id}/status")
def update_status(booking_id: str, body: BookingStatusIn, store: Store = Depends(get_store)):
    with store.transaction():
        return booking_out(store, advance_booking_status(store, booking_id, body.status, body.actorId))


@router.get("/bookings/{booking_id}/ticket")
def read_ticket(booking_id: str, store: Store = Depends(get_store)):
    with store.transaction():
        return ticket_view(store, booking_id)


@router.get("/bookings/{booking_id}/rating")
def read_booking_rating(booking_id: str, store: Store = Depends(get_store)):
    with store.transaction():
        return rating_out(get_booking_rating(store, booking_id))
