"""Driver dashboards: per-trip activity, totals, and the boarding scanner report.

Agency scanners see the numbers of the agency they work for.
"""

from datetime import date

from loguru import logger

from rideseat.core.clock import to_iso, utcnow
from rideseat.core.errors import ValidationError
from rideseat.db.store import Store
from rideseat.models.trip import TRIP_ACTIVE, TRIP_FULL, TRIP_COMPLETED
from rideseat.services.hydrate import passenger_of, trip_out
from rideseat.services.trip_service import list_driver_trips, operator_id_for

PERIOD_PAST = "past"
PERIOD_TODAY = "today"
PERIOD_UPCOMING = "upcoming"
REPORT_PERIODS = (PERIOD_PAST, PERIOD_TODAY, PERIOD_UPCOMING)


def driver_activities(store: Store, user_id: str) -> list[dict]:
    out = []
    with store.transaction():
        for trip in list_driver_trips(store, user_id):
            bookings = store.bookings_for_trip(trip.id)
            booked_seats = sum(b.seats for b in bookings)
            out.append({
                "trip": trip_out(store, trip),
                "bookingsCount": len(bookings),
                "bookedSeats": booked_seats,
                "remainingSeats": max(0, trip.seats_available),
                "collectedAmount": booked_seats * trip.price_per_seat,
            })
    return out


def driver_activity_summary(store: Store, user_id: str) -> dict:
    summary = {"doneCount": 0, "activeCount": 0, "bookingsCount": 0, "remainingSeats": 0, "income": 0}
    with store.transaction():
        for trip in list_driver_trips(store, user_id):
            bookings = store.bookings_for_trip(trip.id)
            if trip.status == TRIP_COMPLETED:
                summary["doneCount"] += 1
            elif trip.status in (TRIP_ACTIVE, TRIP_FULL):
                summary["activeCount"] += 1
            summary["bookingsCount"] += len(bookings)
            summary["remainingSeats"] += max(0, trip.seats_available)
            summary["income"] += sum(b.seats for b in bookings) * trip.price_per_seat
    return summary


def scanner_count(store: Store, user_id: str | None) -> int:
    return store.scan_counts.get(user_id, 0) if user_id else 0


def increment_scanner_count(store: Store, user_id: str | None) -> int:
    """Count one manual check-in for the scanner. Without a user id nothing is counted."""
    if not user_id:
        return 0
    with store.transaction():
        store.scan_counts[user_id] = store.scan_counts.get(user_id, 0) + 1
        count = store.scan_counts[user_id]
    logger.debug("scanner {} count now {}", user_id, count)
    return count


def _in_period(departure_date: str | None, period: str, today: str) -> bool:
    if period == PERIOD_PAST:
        return bool(departure_date) and departure_date < today
    if period == PERIOD_TODAY:
        return departure_date == today
    # trips without a date are treated as still to come
    return not departure_date or departure_date > today


def scanner_report(store: Store, user_id: str, period: str = PERIOD_TODAY, today: date | None = None) -> list[dict]:
    """Boarding list of the operator's non-cancelled bookings departing in `period`."""
    if period not in REPORT_PERIODS:
        raise ValidationError(f"Period must be one of: {', '.join(REPORT_PERIODS)}")
    today_str = (today or utcnow().date()).isoformat()
    driver_id = operator_id_for(store, user_id)

    items = []
    with store.transaction():
        for trip in store.trips.values():
            if trip.driver_id != driver_id or not _in_period(trip.departure_date, period, today_str):
                continue
            origin = store.find_hotpoint(trip.departure_hotpoint_id)
            destination = store.find_hotpoint(trip.destination_hotpoint_id)
            route = f"{origin.name if origin else ''} → {destination.name if destination else ''}"
            for b in store.bookings_for_trip(trip.id):
                scanned_at = store.scanned.get(b.id)
                items.append({
                    "id": f"sr_{b.id}",
                    "bookingId": b.id,
                    "route": route,
                    "passengerName": (passenger_of(store, b) or {}).get("name", ""),
                    "departureDate": trip.departure_date,
                    "departureTime": trip.departure_time or "",
                    "status": "scanned" if scanned_at else "pending",
                    "scannedAt": to_iso(scanned_at),
                })
    return items
