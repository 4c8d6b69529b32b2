import uuid

from loguru import logger

from rideseat.core.errors import ConflictError, NotFoundError, ValidationError
from rideseat.db.store import Store
from rideseat.models.hotpoint import Hotpoint
from rideseat.models.trip import (
    Trip, TRIP_ACTIVE, TRIP_FULL, TRIP_COMPLETED, TRIP_CANCELLED, TRIP_TYPES, PAYMENT_METHODS,
)
from rideseat.models.vehicle import Vehicle
from rideseat.services import inventory_service
from rideseat.services.audit_service import log_audit

# statuses a driver may ask for; `full` only ever follows from inventory
SETTABLE_TRIP_STATUSES = (TRIP_ACTIVE, TRIP_COMPLETED, TRIP_CANCELLED)
CLOSED_TRIP_STATUSES = (TRIP_COMPLETED, TRIP_CANCELLED)

MAX_SERIES_SLOTS = 48
DEFAULT_SERIES_DURATION = 180
MINUTES_PER_DAY = 24 * 60


def operator_id_for(store: Store, user_id: str) -> str:
    """Driver id a user works for: agency scanners act for their agency."""
    user = store.find_user(user_id)
    return user.operator_id if user else user_id


def acts_for_driver(store: Store, user_id: str, driver_id: str) -> bool:
    if user_id == driver_id:
        return True
    user = store.find_user(user_id)
    return bool(user and user.is_agency_scanner and user.agency_id == driver_id)


def list_hotpoints(store: Store) -> list[Hotpoint]:
    with store.transaction():
        return list(store.hotpoints.values())


def list_vehicles_for_user(store: Store, user_id: str | None) -> list[Vehicle]:
    if not user_id:
        return []
    user = store.find_user(user_id)
    if not user or not ({"driver", "agency"} & set(user.roles)):
        return []
    owner_id = user.operator_id
    with store.transaction():
        return [v for v in store.vehicles.values() if v.driver_id == owner_id or v.owner_id == owner_id]


def search_trips(store: Store, from_id: str | None = None, to_id: str | None = None,
                 date: str | None = None, trip_type: str | None = None) -> list[Trip]:
    """Bookable trips only (status `active`), newest publication first."""
    with store.transaction():
        items = [t for t in reversed(list(store.trips.values())) if t.status == TRIP_ACTIVE]
    if from_id:
        items = [t for t in items if t.departure_hotpoint_id == from_id]
    if to_id:
        items = [t for t in items if t.destination_hotpoint_id == to_id]
    if trip_type:
        items = [t for t in items if t.type == trip_type]
    if date:
        items = [t for t in items if t.departure_date == date]
    return items


def get_trip(store: Store, trip_id: str) -> Trip:
    trip = store.find_trip(trip_id)
    if not trip:
        raise NotFoundError("Trip not found")
    return trip


def list_driver_trips(store: Store, user_id: str) -> list[Trip]:
    driver_id = operator_id_for(store, user_id)
    with store.transaction():
        return [t for t in reversed(list(store.trips.values())) if t.driver_id == driver_id]


def publish_trip(
    store: Store,
    driver_id: str,
    vehicle_id: str,
    departure_hotpoint_id: str,
    destination_hotpoint_id: str,
    seats_available: int = 4,
    price_per_seat: int = 0,
    allow_full_car: bool = False,
    payment_methods: list[str] | None = None,
    trip_type: str = "insta",
    departure_date: str | None = None,
    departure_time: str = "09:00",
    arrival_time: str | None = None,
    duration_minutes: int | None = None,
) -> Trip:
    with store.transaction():
        if not (
            store.find_user(driver_id)
            and store.find_vehicle(vehicle_id)
            and store.find_hotpoint(departure_hotpoint_id)
            and store.find_hotpoint(destination_hotpoint_id)
        ):
            raise ValidationError("Missing driver, vehicle, or hotpoints")
        if seats_available < 0:
            raise ValidationError("Seats available cannot be negative")
        if price_per_seat < 0:
            raise ValidationError("Price per seat cannot be negative")
        methods = list(payment_methods) if payment_methods else list(PAYMENT_METHODS)
        unknown = [m for m in methods if m not in PAYMENT_METHODS]
        if unknown:
            raise ValidationError(f"Unsupported payment method: {unknown[0]}")
        if trip_type not in TRIP_TYPES:
            raise ValidationError(f"Unsupported trip type: {trip_type}")

        trip = Trip(
            id=f"t_{uuid.uuid4().hex[:12]}",
            departure_hotpoint_id=departure_hotpoint_id,
            destination_hotpoint_id=destination_hotpoint_id,
            driver_id=driver_id,
            vehicle_id=vehicle_id,
            seats_available=seats_available,
            capacity=seats_available,
            price_per_seat=price_per_seat,
            allow_full_car=allow_full_car,
            payment_methods=methods,
            status=TRIP_FULL if seats_available == 0 else TRIP_ACTIVE,
            type=trip_type,
            departure_date=departure_date,
            departure_time=departure_time,
            arrival_time=arrival_time,
            duration_minutes=duration_minutes,
        )
        store.add_trip(trip)
        log_audit(store, driver_id, "trip.publish", "trip", trip.id, {"seats": seats_available, "pricePerSeat": price_per_seat})
    logger.info("trip {} published by {} with {} seat(s)", trip.id, driver_id, seats_available)
    return trip


def _minutes_of(value: str) -> int:
    try:
        hours, minutes = (int(part) for part in value.split(":"))
    except (AttributeError, ValueError):
        raise ValidationError(f"Invalid time: {value}")
    if not (0 <= hours < 24 and 0 <= minutes < 60):
        raise ValidationError(f"Invalid time: {value}")
    return hours * 60 + minutes


def _clock_of(total_minutes: int) -> str:
    total_minutes %= MINUTES_PER_DAY
    return f"{total_minutes // 60:02d}:{total_minutes % 60:02d}"


def series_slots(start_time: str = "06:00", interval_minutes: int = 60, end_time: str | None = None) -> list[str]:
    """Departure times from `start_time` every `interval_minutes` up to `end_time` inclusive.

    Without an end time the series runs for MAX_SERIES_SLOTS departures.
    """
    if interval_minutes <= 0:
        raise ValidationError("Interval must be a positive number of minutes")
    current = _minutes_of(start_time)
    last = _minutes_of(end_time) if end_time else current + interval_minutes * MAX_SERIES_SLOTS
    if last < current:
        raise ValidationError("End time cannot be before start time")

    slots = []
    while len(slots) < MAX_SERIES_SLOTS and current <= last:
        slots.append(_clock_of(current))
        current += interval_minutes
    return slots


def publish_trip_series(
    store: Store,
    driver_id: str,
    vehicle_id: str,
    departure_hotpoint_id: str,
    destination_hotpoint_id: str,
    departure_date: str | None = None,
    start_time: str = "06:00",
    interval_minutes: int = 60,
    end_time: str | None = None,
    duration_minutes: int = DEFAULT_SERIES_DURATION,
    seats_available: int = 4,
    price_per_seat: int = 0,
    allow_full_car: bool = False,
    payment_methods: list[str] | None = None,
    trip_type: str = "scheduled",
) -> list[Trip]:
    """Publish one trip per departure slot of the day, all sharing the same route and vehicle.

    Arrival times wrap past midnight. The whole series is published under one
    lock, so it either appears in full or not at all.
    """
    slots = series_slots(start_time, interval_minutes, end_time)
    if duration_minutes < 0:
        raise ValidationError("Duration cannot be negative")

    trips = []
    with store.transaction():
        for departure_time in slots:
            trips.append(publish_trip(
                store,
                driver_id=driver_id,
                vehicle_id=vehicle_id,
                departure_hotpoint_id=departure_hotpoint_id,
                destination_hotpoint_id=destination_hotpoint_id,
                seats_available=seats_available,
                price_per_seat=price_per_seat,
                allow_full_car=allow_full_car,
                payment_methods=payment_methods,
                trip_type=trip_type,
                departure_date=departure_date,
                departure_time=departure_time,
                arrival_time=_clock_of(_minutes_of(departure_time) + duration_minutes),
                duration_minutes=duration_minutes,
            ))
    logger.info("series of {} trip(s) published by {} on {}", len(trips), driver_id, departure_date)
    return trips


def set_trip_status(store: Store, trip_id: str, status: str, actor_id: str | None = None) -> Trip:
    """Driver-requested status change. Completed and cancelled trips are closed for good."""
    if status not in SETTABLE_TRIP_STATUSES:
        raise ValidationError(f"Trip status must be one of: {', '.join(SETTABLE_TRIP_STATUSES)}")
    with store.transaction():
        trip = get_trip(store, trip_id)
        previous = trip.status
        if previous in CLOSED_TRIP_STATUSES:
            raise ConflictError(f"Trip is already {previous}")
        trip.status = inventory_service.derive_status(trip, status)
        log_audit(store, actor_id or trip.driver_id, "trip.status", "trip", trip.id, {"from": previous, "to": trip.status})
    logger.info("trip {} status {} -> {}", trip.id, previous, trip.status)
    return trip
