"""Booking coordinator: slot booking, booking status transitions and admin slot toggles.

Every operation that touches both a slot and the booking ledger runs through
``transact``: the slot's status is changed by a conditional UPDATE that only matches the
state the caller expects, so of two requests racing for the same slot exactly one
commits and the other gets a ConflictError.
"""
import logging
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import update
from sqlalchemy.orm import Session

from booking_core.actors import Actor, Permission, require, require_admin, require_owner_or_admin
from booking_core.errors import ConflictError, NotFoundError, ValidationError
from booking_core.transaction import transact
from models.booking import Booking
from models.enums import BookingStatus, SlotStatus
from models.slot import Slot
from repositories.booking_repository import get_active_booking_for_slot, get_booking
from repositories.station_repository import get_slot, get_station
from utils.timeutils import as_utc, utcnow

LOG = logging.getLogger(__name__)


@dataclass
class BookingResult:
    """Outcome of a committed booking."""

    booking: Booking
    slot_number: int
    slot_status: SlotStatus

    @property
    def booking_id(self) -> str:
        return self.booking.id


def _occupy_guard(slot: Slot):
    return (
        update(Slot)
        .where(Slot.id == slot.id, Slot.status == SlotStatus.available.value)
        .values(status=SlotStatus.occupied.value, version=Slot.version + 1)
    )


def _release_guard(slot_id: str):
    return (
        update(Slot)
        .where(Slot.id == slot_id)
        .values(status=SlotStatus.available.value, version=Slot.version + 1)
        .execution_options(synchronize_session=False)
    )


def book_slot(
    session: Session,
    *,
    station_id: str,
    slot_number: int,
    booking_time: datetime,
    actor: Actor,
    now: datetime | None = None,
) -> BookingResult:
    """Reserve one slot of a station for booking_time.

    Raises ValidationError (time not in the future), NotFoundError (station or slot),
    ConflictError (slot not available, or lost the race to another booking).
    """
    require(actor, Permission.book_slot)
    now = as_utc(now) if now is not None else utcnow()
    booking_time = as_utc(booking_time)
    if booking_time <= now:
        raise ValidationError("Booking time must be in the future")

    station = get_station(session, station_id)
    if station is None or not station.is_active:
        raise NotFoundError("Station not found")
    slot = get_slot(session, station_id, slot_number)
    if slot is None:
        raise NotFoundError(f"Slot {slot_number} not found")
    if slot.status != SlotStatus.available.value:
        LOG.warning("BOOKING_CONFLICT station=%s slot=%s status=%s", station_id, slot_number, slot.status)
        raise ConflictError(f"Slot {slot_number} is no longer available")

    def write_booking(s: Session) -> Booking:
        booking = Booking(
            user_id=actor.user_id,
            user_email=actor.email,
            station_id=station.id,
            station_name=station.name,
            slot_id=slot.id,
            slot_number=slot.number,
            booking_time=booking_time,
            status=BookingStatus.active.value,
            created_at=now,
        )
        s.add(booking)
        s.flush()
        return booking

    try:
        booking = transact(
            session,
            _occupy_guard(slot),
            write_booking,
            conflict_message=f"Slot {slot_number} is no longer available",
        )
    except ConflictError:
        LOG.warning("BOOKING_CONFLICT station=%s slot=%s lost race", station_id, slot_number)
        raise
    session.refresh(booking)
    LOG.info(
        "SLOT_BOOKED booking=%s station=%s slot=%s user=%s booking_time=%s",
        booking.id, station_id, slot_number, actor.user_id, booking_time.isoformat(),
    )
    return BookingResult(booking=booking, slot_number=slot_number, slot_status=SlotStatus.occupied)


def _finish_booking(session: Session, booking: Booking, new_status: BookingStatus) -> Booking:
    """Move an active booking to new_status and free its slot in one transaction."""
    guard = (
        update(Booking)
        .where(Booking.id == booking.id, Booking.status == BookingStatus.active.value)
        .values(status=new_status.value, updated_at=utcnow())
    )
    slot_id = booking.slot_id

    def release_slot(s: Session) -> None:
        if slot_id is not None:
            s.execute(_release_guard(slot_id))

    transact(session, guard, release_slot, conflict_message="Booking is no longer active")
    session.refresh(booking)
    return booking


def cancel_booking(session: Session, booking_id: str, actor: Actor) -> Booking:
    """Cancel an active booking (owner or admin) and free its slot."""
    booking = get_booking(session, booking_id)
    if booking is None:
        raise NotFoundError("Booking not found")
    require_owner_or_admin(actor, booking.user_id)
    if booking.status != BookingStatus.active.value:
        raise ConflictError("Booking not found or already cancelled")
    booking = _finish_booking(session, booking, BookingStatus.cancelled)
    LOG.info("BOOKING_CANCELLED booking=%s slot=%s by=%s", booking.id, booking.slot_number, actor.user_id)
    return booking


def complete_booking(session: Session, booking_id: str, actor: Actor) -> Booking:
    """Mark an active booking completed (admin) and free its slot."""
    require_admin(actor)
    booking = get_booking(session, booking_id)
    if booking is None:
        raise NotFoundError("Booking not found")
    if booking.status != BookingStatus.active.value:
        raise ConflictError("Booking is no longer active")
    booking = _finish_booking(session, booking, BookingStatus.completed)
    LOG.info("BOOKING_COMPLETED booking=%s slot=%s by=%s", booking.id, booking.slot_number, actor.user_id)
    return booking


def set_slot_status(
    session: Session,
    station_id: str,
    slot_number: int,
    status: SlotStatus,
    actor: Actor,
    expected_status: SlotStatus | None = None,
) -> Slot:
    """Admin slot toggle as a conditional write.

    The update only applies if the slot still has the status the admin saw
    (expected_status, or its current status when not given). Releasing a slot completes
    the active booking holding it in the same transaction.
    """
    require(actor, Permission.manage_slots)
    station = get_station(session, station_id)
    if station is None:
        raise NotFoundError("Station not found")
    slot = get_slot(session, station_id, slot_number)
    if slot is None:
        raise NotFoundError(f"Slot {slot_number} not found")
    observed = expected_status.value if expected_status is not None else slot.status
    if slot.status != observed:
        raise ConflictError(f"Slot {slot_number} is {slot.status}, expected {observed}")
    if slot.status == status.value:
        return slot

    guard = (
        update(Slot)
        .where(Slot.id == slot.id, Slot.status == observed, Slot.version == slot.version)
        .values(status=status.value, version=Slot.version + 1)
    )
    slot_id = slot.id

    def settle_bookings(s: Session) -> None:
        if status is SlotStatus.available:
            active = get_active_booking_for_slot(s, slot_id)
            if active is not None:
                s.execute(
                    update(Booking)
                    .where(Booking.id == active.id, Booking.status == BookingStatus.active.value)
                    .values(status=BookingStatus.completed.value, updated_at=utcnow())
                    .execution_options(synchronize_session=False)
                )

    transact(session, guard, settle_bookings, conflict_message=f"Slot {slot_number} was changed concurrently")
    session.refresh(slot)
    LOG.info(
        "SLOT_STATUS_CHANGED station=%s slot=%s status=%s by=%s",
        station_id, slot_number, status.value, actor.user_id,
    )
    return slot
