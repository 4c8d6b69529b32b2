import uuid

from loguru import logger

from rideseat.core.clock import utcnow
from rideseat.db.store import Store
from rideseat.models.notification import DriverNotification

def notify_driver_of_booking(store: Store, driver_id: str, booking_id: str, trip_id: str, passenger_name: str, seats: int) -> DriverNotification:
    """Queue the in-app notice a driver sees when a seat on one of their trips is booked."""
    n = DriverNotification(
        id=f"notif_{uuid.uuid4().hex[:12]}",
        driver_id=driver_id,
        booking_id=booking_id,
        trip_id=trip_id,
        passenger_name=passenger_name,
        seats=seats,
        created_at=utcnow(),
    )
    store.driver_notifications.append(n)
    logger.debug("queued booking notification {} for driver {}", n.id, driver_id)
    return n

def list_driver_notifications(store: Store, driver_id: str) -> list[DriverNotification]:
    with store.transaction():
        items = [n for n in store.driver_notifications if n.driver_id == driver_id]
    return sorted(items, key=lambda n: n.created_at, reverse=True)

def mark_driver_notifications_read(store: Store, driver_id: str) -> int:
    with store.transaction():
        count = 0
        for n in store.driver_notifications:
            if n.driver_id == driver_id and not n.read:
                n.read = True
                count += 1
    return count
