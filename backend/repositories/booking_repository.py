"""Booking repository: reads over the booking ledger. Writes go through the booking coordinator."""
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from models.booking import Booking
from models.enums import BookingStatus


def get_booking(session: Session, booking_id: str) -> Optional[Booking]:
    """Return booking by id or None."""
    return session.get(Booking, booking_id)


def list_bookings_for_user(session: Session, user_id: str, limit: int | None = None) -> list[Booking]:
    """Return a user's bookings, latest booking time first."""
    stmt = (
        select(Booking)
        .where(Booking.user_id == user_id)
        .order_by(Booking.booking_time.desc(), Booking.created_at.desc())
    )
    if limit is not None:
        stmt = stmt.limit(limit)
    return list(session.execute(stmt).scalars().all())


def list_bookings(
    session: Session,
    *,
    status: str | None = None,
    station_id: str | None = None,
    limit: int | None = None,
) -> list[Booking]:
    """Return bookings (newest first), optionally filtered by status and station."""
    stmt = select(Booking).order_by(Booking.created_at.desc())
    if status:
        stmt = stmt.where(Booking.status == status)
    if station_id:
        stmt = stmt.where(Booking.station_id == station_id)
    if limit is not None:
        stmt = stmt.limit(limit)
    return list(session.execute(stmt).scalars().all())


def get_active_booking_for_slot(session: Session, slot_id: str) -> Optional[Booking]:
    """Return the active booking holding a slot, or None."""
    return session.execute(
        select(Booking).where(Booking.slot_id == slot_id, Booking.status == BookingStatus.active.value)
    ).scalar_one_or_none()


def count_active_bookings_for_user(session: Session, user_id: str) -> int:
    """Return how many active bookings a user holds."""
    result = session.execute(
        select(func.count())
        .select_from(Booking)
        .where(Booking.user_id == user_id, Booking.status == BookingStatus.active.value)
    )
    return result.scalar() or 0


def count_bookings(session: Session, status: str | None = None) -> int:
    """Return the number of bookings, optionally with one status."""
    stmt = select(func.count()).select_from(Booking)
    if status:
        stmt = stmt.where(Booking.status == status)
    return session.execute(stmt).scalar() or 0
