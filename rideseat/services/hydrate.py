"""Resolve ids into the nested camelCase JSON returned by the API.

This is the only place that turns references into embedded objects. Engine
code keeps working on ids.
"""

from rideseat.core.clock import to_iso
from rideseat.db.store import Store
from rideseat.models.audit_log import AuditLog
from rideseat.models.booking import Booking, GuestPassenger, TripSnapshot
from rideseat.models.dispute import Dispute
from rideseat.models.hotpoint import Hotpoint
from rideseat.models.notification import DriverNotification
from rideseat.models.rating import Rating
from rideseat.models.trip import Trip
from rideseat.models.user import User
from rideseat.models.vehicle import Vehicle


def hotpoint_out(h: Hotpoint | None) -> dict | None:
    if h is None:
        return None
    return {
        "id": h.id,
        "name": h.name,
        "address": h.address,
        "latitude": h.latitude,
        "longitude": h.longitude,
        "country": h.country,
    }


def user_out(u: User | None) -> dict | None:
    if u is None:
        return None
    out = {
        "id": u.id,
        "name": u.name,
        "email": u.email,
        "phone": u.phone,
        "roles": list(u.roles),
        "rating": u.rating,
        "statusBadge": u.status_badge,
    }
    if u.avatar_uri:
        out["avatarUri"] = u.avatar_uri
    if u.agency_sub_role:
        out["agencySubRole"] = u.agency_sub_role
    if u.agency_id:
        out["agencyId"] = u.agency_id
    return out


def guest_out(g: GuestPassenger) -> dict:
    return {"id": g.id, "name": g.name, "phone": g.phone, "email": g.email}


def vehicle_out(v: Vehicle | None) -> dict | None:
    if v is None:
        return None
    out = {
        "id": v.id,
        "make": v.make,
        "model": v.model,
        "color": v.color,
        "licensePlate": v.license_plate,
        "seats": v.seats,
        "approvalStatus": v.approval_status,
        "driverId": v.driver_id,
    }
    if v.owner_id:
        out["ownerId"] = v.owner_id
    return out


def trip_out(store: Store, t: Trip | None) -> dict | None:
    if t is None:
        return None
    return {
        "id": t.id,
        "type": t.type,
        "departureHotpoint": hotpoint_out(store.find_hotpoint(t.departure_hotpoint_id)),
        "destinationHotpoint": hotpoint_out(store.find_hotpoint(t.destination_hotpoint_id)),
        "departureDate": t.departure_date,
        "departureTime": t.departure_time,
        "arrivalTime": t.arrival_time,
        "durationMinutes": t.duration_minutes,
        "seatsAvailable": t.seats_available,
        "capacity": t.capacity,
        "pricePerSeat": t.price_per_seat,
        "allowFullCar": t.allow_full_car,
        "paymentMethods": list(t.payment_methods),
        "driver": user_out(store.find_user(t.driver_id)),
        "vehicle": vehicle_out(store.find_vehicle(t.vehicle_id)),
        "status": t.status,
    }


def snapshot_out(s: TripSnapshot) -> dict:
    return {
        "tripId": s.trip_id,
        "departureHotpointId": s.departure_hotpoint_id,
        "destinationHotpointId": s.destination_hotpoint_id,
        "driverId": s.driver_id,
        "vehicleId": s.vehicle_id,
        "seatsAvailable": s.seats_available,
        "status": s.status,
        "pricePerSeat": s.price_per_seat,
        "departureDate": s.departure_date,
        "departureTime": s.departure_time,
    }


def passenger_of(store: Store, b: Booking) -> dict | None:
    user = store.find_user(b.passenger_id)
    if user is not None:
        return user_out(user)
    if b.guest_passenger is not None:
        return guest_out(b.guest_passenger)
    return None


def driver_id_of(store: Store, b: Booking) -> str:
    trip = store.find_trip(b.trip_id)
    return trip.driver_id if trip else b.trip_snapshot.driver_id


def booking_out(store: Store, b: Booking) -> dict:
    return {
        "id": b.id,
        "trip": trip_out(store, store.find_trip(b.trip_id)),
        "tripSnapshot": snapshot_out(b.trip_snapshot),
        "passenger": passenger_of(store, b),
        "seats": b.seats,
        "paymentMethod": b.payment_method,
        "isFullCar": b.is_full_car,
        "status": b.status,
        "createdAt": to_iso(b.created_at),
        "ticketId": b.ticket_id,
        "ticketNumber": b.ticket_number,
        "ticketIssuedAt": to_iso(b.ticket_issued_at),
        "paymentStatus": b.payment_status,
        "paymentReference": b.payment_reference,
        "scanned": store.is_scanned(b.id),
    }


def ticket_out(store: Store, b: Booking, qr_payload: str) -> dict:
    trip = store.find_trip(b.trip_id)
    passenger = passenger_of(store, b) or {}
    driver = store.find_user(driver_id_of(store, b))
    price = trip.price_per_seat if trip else b.trip_snapshot.price_per_seat
    return {
        "bookingId": b.id,
        "ticketId": b.ticket_id,
        "ticketNumber": b.ticket_number,
        "issuedAt": to_iso(b.ticket_issued_at),
        "passengerName": passenger.get("name"),
        "driverName": driver.name if driver else None,
        "from": _hotpoint_name(store, trip.departure_hotpoint_id if trip else b.trip_snapshot.departure_hotpoint_id),
        "to": _hotpoint_name(store, trip.destination_hotpoint_id if trip else b.trip_snapshot.destination_hotpoint_id),
        "departureDate": trip.departure_date if trip else b.trip_snapshot.departure_date,
        "departureTime": trip.departure_time if trip else b.trip_snapshot.departure_time,
        "seats": b.seats,
        "isFullCar": b.is_full_car,
        "paymentMethod": b.payment_method,
        "paymentStatus": b.payment_status,
        "amountTotal": b.seats * price,
        "status": b.status,
        "qrPayload": qr_payload,
    }


def _hotpoint_name(store: Store, hotpoint_id: str) -> str | None:
    h = store.find_hotpoint(hotpoint_id)
    return h.name if h else None


def dispute_out(d: Dispute) -> dict:
    return {
        "id": d.id,
        "bookingId": d.booking_id,
        "tripId": d.trip_id,
        "reporterId": d.reporter_id,
        "type": d.type,
        "status": d.status,
        "description": d.description,
        "resolution": d.resolution,
        "resolvedBy": d.resolved_by,
        "resolvedAt": to_iso(d.resolved_at),
        "createdAt": to_iso(d.created_at),
    }


def rating_out(r: Rating | None) -> dict | None:
    if r is None:
        return None
    return {
        "id": r.id,
        "bookingId": r.booking_id,
        "driverId": r.driver_id,
        "passengerId": r.passenger_id,
        "score": r.score,
        "comment": r.comment,
        "createdAt": to_iso(r.created_at),
    }


def notification_out(n: DriverNotification) -> dict:
    return {
        "id": n.id,
        "type": n.type,
        "bookingId": n.booking_id,
        "tripId": n.trip_id,
        "driverId": n.driver_id,
        "passengerName": n.passenger_name,
        "seats": n.seats,
        "createdAt": to_iso(n.created_at),
        "read": n.read,
    }


def audit_out(a: AuditLog) -> dict:
    return {
        "id": a.id,
        "actorId": a.actor_id,
        "action": a.action,
        "entityType": a.entity_type,
        "entityId": a.entity_id,
        "details": a.details,
        "createdAt": to_iso(a.created_at),
    }
