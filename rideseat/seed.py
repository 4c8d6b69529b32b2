from dataclasses import replace

from loguru import logger

from rideseat.core.clock import parse_iso
from rideseat.db.store import Store, store as default_store
from rideseat.models.booking import Booking, BOOKING_CANCELLED
from rideseat.models.dispute import Dispute
from rideseat.models.hotpoint import Hotpoint
from rideseat.models.rating import Rating
from rideseat.models.trip import Trip
from rideseat.models.user import User, AGENCY_MANAGER, AGENCY_SCANNER
from rideseat.models.vehicle import Vehicle
from rideseat.services.booking_service import snapshot_trip
from rideseat.services.ticket_service import build_ticket_id, build_ticket_number

ALL_METHODS = ["cash", "mobile_money", "card"]

HOTPOINTS = [
    # id, name, address, latitude, longitude, country
    ("hp1", "Kigali", "Kigali City Center", -1.9441, 30.0619, "Rwanda"),
    ("hp2", "Rubavu", "Rubavu Main Station", -1.679, 29.2594, "Rwanda"),
    ("hp3", "Rusizi", "Rusizi Bus Park", -2.4846, 28.9075, "Rwanda"),
    ("hp4", "Goma", "Goma Downtown", -1.6835, 29.2389, "DR Congo"),
    ("hp5", "Kampala", "Kampala Central", 0.3476, 32.5825, "Uganda"),
    ("hp6", "Musanze", "Musanze Bus Terminal", -1.4998, 29.6347, "Rwanda"),
    ("hp7", "Huye", "Huye Main Roundabout", -2.5967, 29.7394, "Rwanda"),
    ("hp8", "Muhanga", "Muhanga Transit Point", -2.0845, 29.7569, "Rwanda"),
    ("hp9", "Bujumbura", "Bujumbura Centre", -3.3614, 29.3599, "Burundi"),
    ("hp10", "Kabale", "Kabale Main Stage", -1.2486, 29.9899, "Uganda"),
    ("hp11", "Ruhengeri", "Ruhengeri Market", -1.4998, 29.6366, "Rwanda"),
    ("hp12", "Nyamagabe", "Nyamagabe Junction", -2.478, 29.566, "Rwanda"),
    ("hp13", "SP Nyarutarama", "SP Petrol Station Nyarutarama, Kigali", -1.9368, 30.1046, "Rwanda"),
    ("hp14", "Simba Gisenyi", "Simba Supermarket Gisenyi, Rubavu", -1.7028, 29.2583, "Rwanda"),
    ("hp15", "Rusizi Border", "Rusizi One Stop Border Post", -2.4908, 28.8956, "Rwanda"),
    ("hp16", "Nyabugogo Taxi Park", "Nyabugogo Bus & Taxi Terminal, Kigali", -1.9294, 30.0439, "Rwanda"),
    ("hp17", "Remera Bus Stop", "Remera Bus Stop, KG 11 Ave, Kigali", -1.9498, 30.1072, "Rwanda"),
    ("hp18", "Goma Border Petite Barriere", "Petite Barriere Border Crossing, Goma", -1.6774, 29.2466, "DR Congo"),
]


def _avatar(name: str) -> str:
    return f"https://ui-avatars.com/api/?name={name}&size=100&background=random"


USERS = [
    User("u_passenger_1", "Yvan", "passenger@ihute.com", "+123456789", ["passenger"], 4.7, "Traveler"),
    User("u_driver_1", "Camille", "driver@ihute.com", "+123456790", ["driver"], 4.9, "Verified", _avatar("Camille")),
    User("u_driver_2", "Claire", "claire@example.com", "+123456791", ["driver"], 4.9, "Verified", _avatar("Claire")),
    User("u_driver_3", "Jean-Pierre", "jeanpierre@example.com", "+123456792", ["driver"], 4.0, "Verified"),
    User("u_passenger_2", "Amine", "amine@example.com", "+123456793", ["passenger"], 4.6, "Explorer"),
    User("u_passenger_3", "Sarah", "sarah@example.com", "+123456794", ["passenger"], 4.8, "Explorer"),
    User("u_agency_1", "Kigali Express", "agency@ihute.com", "+123456795", ["agency"], 4.8, "Agency",
         _avatar("Kigali+Express"), agency_sub_role=AGENCY_MANAGER),
    User("u_scanner_1", "Scanner Op", "scanner@ihute.com", "+123456796", ["agency"], 4.5, "Scanner",
         agency_sub_role=AGENCY_SCANNER, agency_id="u_agency_1"),
]

VEHICLES = [
    # id, make, model, color, plate, seats, approval, driver, owner
    ("v1", "Toyota", "Corolla", "Silver", "RAB-123-A", 4, "approved", "u_driver_1", None),
    ("v2", "Honda", "Civic", "Black", "RAC-456-B", 4, "pending", "u_driver_2", None),
    ("v3", "Mazda", "CX-5", "White", "RAD-789-C", 5, "approved", "u_driver_3", None),
    ("v4", "Coaster", "Bus", "Blue", "RAB-111-X", 18, "approved", "u_agency_1", "u_agency_1"),
    ("v5", "Coaster", "Bus", "Green", "RAB-222-Y", 18, "approved", "u_agency_1", "u_agency_1"),
]

TRIPS = [
    # id, type, date, from, to, dep, arr, minutes, seats, price, full car, methods, driver, vehicle, status
    ("t1", "insta", None, "hp1", "hp2", "09:00", "12:50", 230, 2, 25500, False, ALL_METHODS, "u_driver_1", "v1", "active"),
    ("t2", "insta", None, "hp1", "hp5", "11:10", "15:30", 260, 0, 25900, False, ["cash", "card"], "u_driver_2", "v2", "full"),
    ("t3", "insta", None, "hp1", "hp10", "13:10", "16:50", 220, 2, 30800, True, ALL_METHODS, "u_driver_3", "v3", "active"),
    ("t4", "scheduled", None, "hp4", "hp2", "11:00", "14:50", 230, 3, 31500, True, ALL_METHODS, "u_driver_1", "v1", "active"),
    ("t5", "scheduled", None, "hp3", "hp2", "10:40", "12:24", 104, 2, 68600, False, ["card"], "u_driver_2", "v2", "completed"),
    ("t_ke1", "scheduled", "2026-02-20", "hp1", "hp2", "06:00", "09:50", 230, 18, 28000, True, ALL_METHODS, "u_agency_1", "v4", "active"),
    ("t_ke2", "scheduled", "2026-02-20", "hp1", "hp6", "07:30", "09:44", 134, 15, 35000, True, ALL_METHODS, "u_agency_1", "v4", "active"),
    ("t_ke3", "scheduled", "2026-02-20", "hp1", "hp4", "08:00", "11:50", 230, 18, 45000, True, ALL_METHODS, "u_agency_1", "v5", "active"),
    ("t_ke4", "scheduled", "2026-02-20", "hp1", "hp3", "09:00", "13:20", 260, 18, 52000, True, ALL_METHODS, "u_agency_1", "v4", "active"),
    ("t_ke5", "scheduled", "2026-02-20", "hp1", "hp7", "12:00", "14:30", 150, 12, 32000, True, ALL_METHODS, "u_agency_1", "v5", "active"),
    ("t_ke6", "scheduled", "2026-02-21", "hp1", "hp2", "06:30", "10:20", 230, 18, 28000, True, ALL_METHODS, "u_agency_1", "v4", "active"),
    ("t_ke7", "scheduled", "2026-02-21", "hp1", "hp5", "08:00", "12:20", 260, 0, 55000, True, ALL_METHODS, "u_agency_1", "v5", "full"),
    ("t_ke8", "scheduled", "2026-02-21", "hp1", "hp8", "14:00", "15:45", 105, 18, 25000, True, ALL_METHODS, "u_agency_1", "v4", "active"),
    ("t_ke9", "scheduled", "2026-02-22", "hp1", "hp2", "07:00", "10:50", 230, 18, 28000, True, ALL_METHODS, "u_agency_1", "v5", "active"),
    ("t_ke10", "scheduled", "2026-02-22", "hp1", "hp6", "18:00", "20:14", 134, 16, 35000, True, ALL_METHODS, "u_agency_1", "v4", "active"),
]

BOOKINGS = [
    # id, trip, passenger, seats, method, full car, status, created/issued at, payment status
    ("b1", "t1", "u_passenger_1", 1, "card", False, "upcoming", "2026-02-17T08:00:00.000Z", "paid"),
    ("b2", "t4", "u_passenger_1", 2, "cash", False, "ongoing", "2026-02-17T09:00:00.000Z", "cash_on_pickup"),
    ("b3", "t5", "u_passenger_1", 1, "card", False, "completed", "2026-02-16T08:00:00.000Z", "paid"),
    ("b4", "t1", "u_passenger_2", 1, "mobile_money", False, "completed", "2026-02-16T11:00:00.000Z", "paid"),
    ("b5", "t4", "u_passenger_3", 1, "cash", False, "upcoming", "2026-02-18T07:10:00.000Z", "cash_on_pickup"),
    ("b6", "t3", "u_passenger_3", 2, "card", True, "ongoing", "2026-02-18T08:30:00.000Z", "paid"),
]

DISPUTES = [
    Dispute("d1", "b1", "u_passenger_1", "payment", "open",
            "Driver requested cash but I had already paid by card.",
            parse_iso("2026-02-17T10:00:00.000Z"), trip_id="t1"),
    Dispute("d2", "b3", "u_passenger_1", "cancellation", "in_review",
            "Trip was cancelled without notice 30 minutes before departure.",
            parse_iso("2026-02-16T14:00:00.000Z"), trip_id="t5"),
    Dispute("d3", "b6", "u_passenger_3", "other", "resolved",
            "Wrong pickup location shown in app.",
            parse_iso("2026-02-18T08:45:00.000Z"), trip_id="t3",
            resolution="Updated hotpoint and issued partial refund.", resolved_by="admin",
            resolved_at=parse_iso("2026-02-18T09:00:00.000Z")),
]

RATINGS = [
    Rating("r_b3", "b3", "u_driver_2", "u_passenger_1", 5, parse_iso("2026-02-16T14:00:00.000Z"), "Smooth ride."),
    Rating("r_b4", "b4", "u_driver_1", "u_passenger_2", 4, parse_iso("2026-02-16T12:00:00.000Z")),
]


def run(store: Store | None = None) -> Store:
    """Reset the store and load the demo data set."""
    store = store or default_store
    with store.transaction():
        store.reset()
        for hid, name, address, lat, lng, country in HOTPOINTS:
            store.add_hotpoint(Hotpoint(hid, name, address, lat, lng, country))
        for u in USERS:
            store.add_user(replace(u, roles=list(u.roles)))
        for vid, make, model, color, plate, seats, approval, driver_id, owner_id in VEHICLES:
            store.add_vehicle(Vehicle(vid, make, model, color, plate, seats, approval, driver_id, owner_id))

        # seats already held by seeded bookings count towards capacity
        held: dict[str, int] = {}
        for _, trip_id, _, seats, _, _, status, _, _ in BOOKINGS:
            if status != BOOKING_CANCELLED:
                held[trip_id] = held.get(trip_id, 0) + seats

        for (tid, ttype, date, dep, dest, dep_time, arr_time, minutes, seats, price,
             full_car, methods, driver_id, vehicle_id, status) in TRIPS:
            store.add_trip(Trip(
                id=tid,
                departure_hotpoint_id=dep,
                destination_hotpoint_id=dest,
                driver_id=driver_id,
                vehicle_id=vehicle_id,
                seats_available=seats,
                capacity=seats + held.get(tid, 0),
                price_per_seat=price,
                allow_full_car=full_car,
                payment_methods=list(methods),
                status=status,
                type=ttype,
                departure_date=date,
                departure_time=dep_time,
                arrival_time=arr_time,
                duration_minutes=minutes,
            ))

        for bid, trip_id, passenger_id, seats, method, full_car, status, at, payment_status in BOOKINGS:
            trip = store.trips[trip_id]
            issued_at = parse_iso(at)
            store.add_booking(Booking(
                id=bid,
                trip_id=trip_id,
                passenger_id=passenger_id,
                seats=seats,
                payment_method=method,
                is_full_car=full_car,
                status=status,
                created_at=issued_at,
                trip_snapshot=snapshot_trip(trip),
                ticket_id=build_ticket_id(bid),
                ticket_number=build_ticket_number(bid, issued_at.year),
                ticket_issued_at=issued_at,
                payment_status=payment_status,
            ))

        for d in DISPUTES:
            store.add_dispute(replace(d))
        for r in RATINGS:
            store.ratings[r.booking_id] = replace(r)

    logger.info("[seed] loaded {} hotpoints, {} users, {} trips, {} bookings, {} disputes",
                len(store.hotpoints), len(store.users), len(store.trips), len(store.bookings), len(store.disputes))
    return store
