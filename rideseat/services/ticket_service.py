"""Ticket issuing and boarding validation.

A ticket is not stored: it is derived from its booking. The QR payload is

    IHTQR|<ticketId>|<bookingId>|<passengerId>|<driverId>|<issuedAt>|<signature>

where the signature comes from a `TicketSigner`. The default signer is a
5-digit positional checksum. It catches typos and casual edits, not forgery;
swap in another signer to get a real MAC without touching callers.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from loguru import logger

from rideseat.core.clock import to_iso, utcnow
from rideseat.core.config import settings
from rideseat.core.errors import NotFoundError
from rideseat.db.store import Store
from rideseat.models.booking import Booking, BOOKING_CANCELLED
from rideseat.services.hydrate import driver_id_of, ticket_out
from rideseat.services.trip_service import acts_for_driver

QR_TAG = "IHTQR"
QR_FIELD_COUNT = 7
TICKET_ID_PREFIX = "tk_"
TICKET_NUMBER_PREFIX = "IHT"

REASON_MALFORMED = "Malformed QR payload"
REASON_BAD_CHECKSUM = "Invalid QR checksum"
REASON_NOT_FOUND = "Booking not found"
REASON_CANCELLED = "Ticket cancelled"
REASON_OTHER_DRIVER = "Ticket belongs to another driver"
REASON_MISMATCH = "Ticket data mismatch"
REASON_ALREADY_SCANNED = "Ticket already scanned"


class TicketSigner(ABC):
    """Produces and checks the last field of a QR payload."""

    @abstractmethod
    def sign(self, seed: str) -> str:
        ...

    def verify(self, seed: str, signature: str) -> bool:
        return self.sign(seed) == signature


class ChecksumTicketSigner(TicketSigner):
    """sum(charCode * 1-based position) mod 100000, zero-padded to 5 digits."""

    MODULUS = 100000

    def sign(self, seed: str) -> str:
        total = 0
        for position, ch in enumerate(seed, start=1):
            total = (total + ord(ch) * position) % self.MODULUS
        return f"{total:05d}"


default_signer: TicketSigner = ChecksumTicketSigner()


@dataclass(frozen=True)
class TicketFields:
    ticket_id: str
    booking_id: str
    passenger_id: str
    driver_id: str
    issued_at: str

    def seed(self) -> str:
        return "|".join((self.ticket_id, self.booking_id, self.passenger_id, self.driver_id, self.issued_at))


@dataclass(frozen=True)
class IssuedTicket:
    ticket_id: str
    ticket_number: str
    issued_at: datetime


@dataclass
class TicketValidation:
    valid: bool
    scanned_at: datetime
    reason: str | None = None
    booking_id: str | None = None
    ticket: dict | None = None
    already_scanned: bool = False
    first_scanned_at: datetime | None = None

    def as_dict(self) -> dict:
        out: dict = {"valid": self.valid, "scannedAt": to_iso(self.scanned_at)}
        if self.reason is not None:
            out["reason"] = self.reason
        if self.booking_id is not None:
            out["bookingId"] = self.booking_id
        if self.ticket is not None:
            out["ticket"] = self.ticket
            out["alreadyScanned"] = self.already_scanned
            out["firstScannedAt"] = to_iso(self.first_scanned_at)
        return out


def build_ticket_id(booking_id: str) -> str:
    return f"{TICKET_ID_PREFIX}{booking_id}"


def build_ticket_number(booking_id: str, year: int) -> str:
    # upper-casing turns the "b_" id prefix into "B_"
    return f"{TICKET_NUMBER_PREFIX}-{booking_id.upper()}-{year}"


def issue_ticket(booking_id: str, issued_at: datetime) -> IssuedTicket:
    return IssuedTicket(
        ticket_id=build_ticket_id(booking_id),
        ticket_number=build_ticket_number(booking_id, issued_at.year),
        issued_at=issued_at,
    )


def encode_qr_payload(fields: TicketFields, signer: TicketSigner = default_signer) -> str:
    seed = fields.seed()
    return f"{QR_TAG}|{seed}|{signer.sign(seed)}"


def parse_qr_payload(payload: Any) -> tuple[TicketFields, str] | None:
    """Split a scanned payload into its fields and checksum; None when it is not a ticket."""
    if not isinstance(payload, str):
        return None
    parts = payload.split("|")
    if len(parts) != QR_FIELD_COUNT or parts[0] != QR_TAG:
        return None
    _, ticket_id, booking_id, passenger_id, driver_id, issued_at, signature = parts
    return TicketFields(ticket_id, booking_id, passenger_id, driver_id, issued_at), signature


def ticket_fields(store: Store, booking: Booking) -> TicketFields:
    """Fields as they stand now, resolved from the store."""
    return TicketFields(
        ticket_id=booking.ticket_id or build_ticket_id(booking.id),
        booking_id=booking.id,
        passenger_id=booking.passenger_id,
        driver_id=driver_id_of(store, booking),
        issued_at=to_iso(booking.ticket_issued_at or booking.created_at),
    )


def qr_payload_for(store: Store, booking: Booking, signer: TicketSigner = default_signer) -> str:
    return encode_qr_payload(ticket_fields(store, booking), signer)


def ticket_view(store: Store, booking_id: str, signer: TicketSigner = default_signer) -> dict:
    with store.transaction():
        booking = store.find_booking(booking_id)
        if not booking:
            raise NotFoundError("Ticket not found")
        return ticket_out(store, booking, qr_payload_for(store, booking, signer))


def validate_ticket(
    store: Store,
    payload: Any,
    validator_user_id: str | None = None,
    signer: TicketSigner = default_signer,
    single_use: bool | None = None,
) -> TicketValidation:
    """Check a scanned payload. Every outcome is returned, never raised."""
    if single_use is None:
        single_use = settings.TICKET_SINGLE_USE
    scanned_at = utcnow()

    def reject(reason: str, booking_id: str | None = None) -> TicketValidation:
        logger.info("ticket rejected: {} (booking={}, validator={})", reason, booking_id, validator_user_id)
        return TicketValidation(valid=False, scanned_at=scanned_at, reason=reason, booking_id=booking_id)

    parsed = parse_qr_payload(payload)
    if parsed is None:
        return reject(REASON_MALFORMED)
    fields, signature = parsed
    if not signer.verify(fields.seed(), signature):
        return reject(REASON_BAD_CHECKSUM, fields.booking_id)

    with store.transaction():
        booking = store.find_booking(fields.booking_id)
        if not booking:
            return reject(REASON_NOT_FOUND, fields.booking_id)
        if booking.status == BOOKING_CANCELLED:
            return reject(REASON_CANCELLED, booking.id)

        current = ticket_fields(store, booking)
        if validator_user_id and not acts_for_driver(store, validator_user_id, current.driver_id):
            return reject(REASON_OTHER_DRIVER, booking.id)

        if (
            current.ticket_id != fields.ticket_id
            or current.passenger_id != fields.passenger_id
            or current.driver_id != fields.driver_id
            or current.issued_at != fields.issued_at
        ):
            return reject(REASON_MISMATCH, booking.id)

        first_scanned_at = store.scanned.get(booking.id)
        if first_scanned_at is not None and single_use:
            return reject(REASON_ALREADY_SCANNED, booking.id)
        if first_scanned_at is None:
            store.scanned[booking.id] = scanned_at
        if validator_user_id:
            store.scan_counts[validator_user_id] = store.scan_counts.get(validator_user_id, 0) + 1

        logger.info(
            "ticket {} scanned for booking {} by {} (rescan={})",
            current.ticket_id, booking.id, validator_user_id or "-", first_scanned_at is not None,
        )
        return TicketValidation(
            valid=True,
            scanned_at=scanned_at,
            booking_id=booking.id,
            ticket=ticket_out(store, booking, encode_qr_payload(current, signer)),
            already_scanned=first_scanned_at is not None,
            first_scanned_at=first_scanned_at or scanned_at,
        )
