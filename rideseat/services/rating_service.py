import uuid

from loguru import logger

from rideseat.core.clock import utcnow
from rideseat.core.errors import ConflictError, ForbiddenError, NotFoundError, ValidationError
from rideseat.db.store import Store
from rideseat.models.booking import BOOKING_COMPLETED
from rideseat.models.rating import Rating
from rideseat.services.audit_service import log_audit
from rideseat.services.hydrate import driver_id_of

MIN_SCORE = 1
MAX_SCORE = 5


def get_booking_rating(store: Store, booking_id: str) -> Rating | None:
    return store.ratings.get(booking_id)


def driver_rating_summary(store: Store, driver_id: str) -> dict:
    with store.transaction():
        scores = [r.score for r in store.ratings.values() if r.driver_id == driver_id]
    if not scores:
        return {"average": 0, "count": 0}
    return {"average": round(sum(scores) / len(scores), 1), "count": len(scores)}


def rate_driver(store: Store, booking_id: str, passenger_id: str, score: int,
                comment: str | None = None) -> tuple[Rating, bool]:
    """Record the passenger's rating for a completed booking.

    One rating per booking: rating again replaces the score and comment but
    keeps the first id and creation time. Returns (rating, created).
    """
    with store.transaction():
        booking = store.find_booking(booking_id)
        if not booking:
            raise NotFoundError("Booking not found")
        if booking.passenger_id != passenger_id:
            raise ForbiddenError("Only the booking passenger can rate this driver")
        if booking.status != BOOKING_COMPLETED:
            raise ConflictError("Driver can only be rated after trip completion")
        if score is None or not MIN_SCORE <= score <= MAX_SCORE:
            raise ValidationError("Rating score must be between 1 and 5")

        driver_id = driver_id_of(store, booking)
        existing = store.ratings.get(booking_id)
        rating = Rating(
            id=existing.id if existing else f"r_{uuid.uuid4().hex[:12]}",
            booking_id=booking_id,
            driver_id=driver_id,
            passenger_id=passenger_id,
            score=score,
            comment=(comment or "").strip() or None,
            created_at=existing.created_at if existing else utcnow(),
        )
        store.ratings[booking_id] = rating

        summary = driver_rating_summary(store, driver_id)
        driver = store.find_user(driver_id)
        if driver:
            driver.rating = summary["average"]
        log_audit(store, passenger_id, "rating.update" if existing else "rating.create", "rating", rating.id,
                  {"bookingId": booking_id, "score": score})

    logger.info("driver {} rated {} for booking {} (average {})", driver_id, score, booking_id, summary["average"])
    return rating, existing is None
