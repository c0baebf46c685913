"""Station repository: list, get, create, update, delete, slot lookups and counts."""
from typing import Any, Optional

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session, selectinload

from models.booking import Booking
from models.enums import BookingStatus, SlotStatus, SlotType
from models.slot import Slot
from models.station import Station
from utils.timeutils import utcnow

# Columns an admin may edit on an existing station.
EDITABLE_STATION_FIELDS = (
    "name",
    "address",
    "city",
    "state",
    "zip_code",
    "phone",
    "latitude",
    "longitude",
    "amenities",
    "connector_types",
    "operating_hours",
    "pricing",
    "owner_name",
    "owner_email",
    "owner_phone",
    "is_active",
)


def build_station(slot_specs: list[tuple[int, str]], **fields: Any) -> Station:
    """Return an unsaved Station with one available Slot per (number, slot_type) in slot_specs."""
    station = Station(**fields)
    station.slots = [
        Slot(number=number, slot_type=slot_type, status=SlotStatus.available.value, version=0)
        for number, slot_type in slot_specs
    ]
    return station


def create_station(
    session: Session,
    *,
    total_slots: int,
    slot_type: str = SlotType.standard.value,
    **fields: Any,
) -> Station:
    """Create a station with total_slots slots (numbers 1..total_slots) of one type, commit, and return it."""
    station = build_station([(i, slot_type) for i in range(1, total_slots + 1)], **fields)
    session.add(station)
    session.commit()
    session.refresh(station)
    return station


def get_station(session: Session, station_id: str) -> Optional[Station]:
    """Return a station by id or None."""
    return session.get(Station, station_id)


def list_stations(session: Session, *, active_only: bool = False) -> list[Station]:
    """Return all stations ordered by name, with slots loaded."""
    stmt = select(Station).order_by(Station.name).options(selectinload(Station.slots))
    if active_only:
        stmt = stmt.where(Station.is_active.is_(True))
    return list(session.execute(stmt).scalars().all())


def update_station(session: Session, station_id: str, updates: dict[str, Any]) -> Optional[Station]:
    """Apply editable field updates. Returns updated station or None if not found."""
    station = get_station(session, station_id)
    if station is None:
        return None
    for key, value in updates.items():
        if key in EDITABLE_STATION_FIELDS:
            setattr(station, key, value)
    session.commit()
    session.refresh(station)
    return station


def count_stations(session: Session) -> int:
    """Return the number of stations (for seeding and the admin dashboard)."""
    result = session.execute(select(func.count()).select_from(Station))
    return result.scalar() or 0


def get_slot(session: Session, station_id: str, number: int) -> Optional[Slot]:
    """Return slot by station and slot number, or None."""
    return session.execute(
        select(Slot).where(Slot.station_id == station_id, Slot.number == number)
    ).scalar_one_or_none()


def slot_status_counts(session: Session) -> dict[str, int]:
    """Return {"total", "available", "occupied"} slot counts across all stations."""
    rows = session.execute(select(Slot.status, func.count()).group_by(Slot.status)).all()
    counts = {status: n for status, n in rows}
    return {
        "total": sum(counts.values()),
        "available": counts.get(SlotStatus.available.value, 0),
        "occupied": counts.get(SlotStatus.occupied.value, 0),
    }


def delete_station(session: Session, station_id: str) -> bool:
    """Delete a station and its slots; its active bookings are cancelled in the same commit.

    Returns True if deleted, False if not found. Bookings stay in the ledger with
    station_id / slot_id set to NULL by the foreign keys.
    """
    station = get_station(session, station_id)
    if station is None:
        return False
    session.execute(
        update(Booking)
        .where(Booking.station_id == station_id, Booking.status == BookingStatus.active.value)
        .values(status=BookingStatus.cancelled.value, updated_at=utcnow())
        .execution_options(synchronize_session=False)
    )
    session.delete(station)
    session.commit()
    return True
