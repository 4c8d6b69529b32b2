"""Seat accounting on a Trip: `seats_available` and `status` move together.

Callers hold `store.transaction()` around these; they do no locking themselves.
"""

from loguru import logger

from rideseat.core.errors import ConflictError
from rideseat.models.trip import Trip, TRIP_ACTIVE, TRIP_FULL


def effective_seats(trip: Trip, seats_requested: int, is_full_car: bool) -> int:
    return trip.seats_available if is_full_car else seats_requested


def reserve(trip: Trip, seats_requested: int, is_full_car: bool) -> int:
    """Take seats off the trip and return how many were granted.

    A full-car request claims everything that is left. The trip becomes
    `full` when nothing remains; this never moves a trip back to `active`.
    """
    granted = effective_seats(trip, seats_requested, is_full_car)
    if granted <= 0 or granted > trip.seats_available:
        raise ConflictError("Not enough seats available")

    trip.seats_available -= granted
    if trip.seats_available == 0:
        trip.status = TRIP_FULL
    logger.debug("trip {} reserved {} seat(s), {} left", trip.id, granted, trip.seats_available)
    return granted


def release(trip: Trip, seats: int) -> None:
    """Give seats back to the trip.

    Only a `full` trip is reopened. A trip the driver completed or cancelled
    keeps that status; its seat count is still restored so the books balance.
    """
    if seats <= 0:
        return
    if trip.seats_available + seats > trip.capacity:
        raise ConflictError("Seat release exceeds trip capacity")

    trip.seats_available += seats
    if trip.status == TRIP_FULL:
        trip.status = TRIP_ACTIVE
    logger.debug("trip {} released {} seat(s), {} left, status={}", trip.id, seats, trip.seats_available, trip.status)


def derive_status(trip: Trip, requested: str) -> str:
    """Status a trip ends up in when `requested` is applied to its current inventory."""
    if requested in (TRIP_ACTIVE, TRIP_FULL):
        return TRIP_FULL if trip.seats_available == 0 else TRIP_ACTIVE
    return requested
