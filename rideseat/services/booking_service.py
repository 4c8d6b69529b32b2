import uuid
from typing import Any

from loguru import logger

from rideseat.core.clock import epoch_millis, utcnow
from rideseat.core.errors import ConflictError, ForbiddenError, NotFoundError, ValidationError
from rideseat.db.store import Store
from rideseat.models.booking import (
    Booking, GuestPassenger, TripSnapshot,
    BOOKING_UPCOMING, BOOKING_CANCELLED, BOOKING_FLOW,
    PAYMENT_CASH_ON_PICKUP, PAYMENT_PAID,
)
from rideseat.models.trip import Trip, TRIP_ACTIVE, PAYMENT_CASH, PAYMENT_MOBILE_MONEY, PAYMENT_CARD
from rideseat.services import inventory_service
from rideseat.services.audit_service import log_audit
from rideseat.services.notification_service import notify_driver_of_booking
from rideseat.services.ticket_service import issue_ticket
from rideseat.services.trip_service import acts_for_driver

BOOKING_ID_PREFIX = "b_"
PAYMENT_REFERENCE_PREFIXES = {PAYMENT_MOBILE_MONEY: "MM", PAYMENT_CARD: "CARD", PAYMENT_CASH: "CASH"}


def payment_status_for(method: str) -> str:
    return PAYMENT_CASH_ON_PICKUP if method == PAYMENT_CASH else PAYMENT_PAID


def make_payment_reference(method: str) -> str:
    stamp = str(epoch_millis())[-8:]
    return f"{PAYMENT_REFERENCE_PREFIXES.get(method, 'CASH')}-{stamp}"


def make_booking_id(store: Store) -> str:
    # booking ids must be unique
    for _ in range(10):
        booking_id = BOOKING_ID_PREFIX + uuid.uuid4().hex[:12]
        if booking_id not in store.bookings:
            return booking_id
    raise ConflictError("could not allocate booking id")


def resolve_passenger(store: Store, passenger: Any) -> tuple[str, GuestPassenger | None, str]:
    """Return (passenger_id, guest record or None, display name)."""
    if isinstance(passenger, str) and passenger.strip():
        user = store.find_user(passenger.strip())
        if not user:
            raise ValidationError("Unknown passenger")
        return user.id, None, user.name
    if isinstance(passenger, dict):
        user = store.find_user(passenger.get("id"))
        if user:
            return user.id, None, user.name
        pid = str(passenger.get("id") or "").strip()
        name = str(passenger.get("name") or "").strip()
        if pid or name:
            guest = GuestPassenger(
                id=pid or f"guest_{uuid.uuid4().hex[:10]}",
                name=name,
                phone=str(passenger.get("phone") or "").strip(),
                email=str(passenger.get("email") or "").strip().lower(),
            )
            return guest.id, guest, guest.name
    raise ValidationError("Passenger required")


def snapshot_trip(trip: Trip) -> TripSnapshot:
    return TripSnapshot(
        trip_id=trip.id,
        departure_hotpoint_id=trip.departure_hotpoint_id,
        destination_hotpoint_id=trip.destination_hotpoint_id,
        driver_id=trip.driver_id,
        vehicle_id=trip.vehicle_id,
        seats_available=trip.seats_available,
        status=trip.status,
        price_per_seat=trip.price_per_seat,
        departure_date=trip.departure_date,
        departure_time=trip.departure_time,
    )


def create_booking(store: Store, trip_id: str, passenger: Any, seats: int | None,
                   payment_method: str | None, is_full_car: bool = False) -> Booking:
    # checks, reservation and insert happen under one store lock
    with store.transaction():
        trip = store.find_trip(trip_id)
        if not trip:
            raise NotFoundError("Trip not found")
        if trip.status != TRIP_ACTIVE:
            raise ConflictError("Trip is not available")
        if not seats or seats <= 0:
            raise ValidationError("Seats must be greater than zero")
        if payment_method not in trip.payment_methods:
            raise ValidationError("Selected payment method is not accepted for this trip")
        if is_full_car and not trip.allow_full_car:
            raise ValidationError("Full car booking is not allowed for this trip")
        passenger_id, guest, passenger_name = resolve_passenger(store, passenger)

        seats_before = trip.seats_available
        granted = inventory_service.reserve(trip, seats, is_full_car)

        now = utcnow()
        booking_id = make_booking_id(store)
        ticket = issue_ticket(booking_id, now)
        booking = Booking(
            id=booking_id,
            trip_id=trip.id,
            passenger_id=passenger_id,
            guest_passenger=guest,
            seats=granted,
            payment_method=payment_method,
            is_full_car=is_full_car or granted == seats_before,
            status=BOOKING_UPCOMING,
            created_at=now,
            trip_snapshot=snapshot_trip(trip),
            ticket_id=ticket.ticket_id,
            ticket_number=ticket.ticket_number,
            ticket_issued_at=ticket.issued_at,
            payment_status=payment_status_for(payment_method),
            payment_reference=make_payment_reference(payment_method),
        )
        store.add_booking(booking)

        notify_driver_of_booking(store, trip.driver_id, booking.id, trip.id, passenger_name, granted)
        log_audit(store, passenger_id, "booking.create", "booking", booking.id,
                  {"tripId": trip.id, "seats": granted, "paymentMethod": payment_method, "isFullCar": booking.is_full_car})

    logger.info("booking {} created on trip {}: {} seat(s), {} left, trip status={}",
                booking.id, trip.id, granted, trip.seats_available, trip.status)
    return booking


def cancel_booking(store: Store, booking_id: str, passenger_id: str | None) -> Booking:
    with store.transaction():
        booking = store.find_booking(booking_id)
        if not booking:
            raise NotFoundError("Booking not found")
        if booking.passenger_id != passenger_id:
            raise ForbiddenError("Only the booking passenger can cancel this booking")
        if booking.status != BOOKING_UPCOMING:
            raise ConflictError("Only upcoming bookings can be cancelled")

        # seats go back to the live trip, not to the snapshot taken at booking time
        trip = store.find_trip(booking.trip_id)
        if trip:
            inventory_service.release(trip, booking.seats)
        booking.status = BOOKING_CANCELLED
        log_audit(store, passenger_id, "booking.cancel", "booking", booking.id, {"tripId": booking.trip_id, "seats": booking.seats})

    logger.info("booking {} cancelled, {} seat(s) returned to trip {}", booking.id, booking.seats, booking.trip_id)
    return booking


def get_booking(store: Store, booking_id: str) -> Booking:
    booking = store.find_booking(booking_id)
    if not booking:
        raise NotFoundError("Booking not found")
    return booking


def list_bookings(store: Store, user_id: str | None = None) -> list[Booking]:
    with store.transaction():
        items = list(store.bookings.values())
    if user_id:
        items = [b for b in items if b.passenger_id == user_id]
    return sorted(items, key=lambda b: b.created_at)


def advance_booking_status(store: Store, booking_id: str, status: str, actor_id: str) -> Booking:
    """Driver-side progress: upcoming -> ongoing -> completed, never backwards."""
    if status not in BOOKING_FLOW:
        raise ValidationError(f"Booking status must be one of: {', '.join(BOOKING_FLOW)}")
    with store.transaction():
        booking = get_booking(store, booking_id)
        trip = store.find_trip(booking.trip_id)
        driver_id = trip.driver_id if trip else booking.trip_snapshot.driver_id
        if not actor_id or not acts_for_driver(store, actor_id, driver_id):
            raise ForbiddenError("Only the trip driver can update this booking")
        if booking.status == BOOKING_CANCELLED:
            raise ConflictError("Cancelled bookings cannot change status")
        if BOOKING_FLOW.index(status) <= BOOKING_FLOW.index(booking.status):
            raise ConflictError("Booking status can only move forward")

        previous = booking.status
        booking.status = status
        log_audit(store, actor_id, "booking.status", "booking", booking.id, {"from": previous, "to": status})
    logger.info("booking {} status {} -> {}", booking.id, previous, status)
    return booking
