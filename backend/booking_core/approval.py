"""Registration approval workflow: submit, approve (materialize station + slots), reject.

A request leaves ``pending`` exactly once. Approval marks the request and creates the
station in a single transaction, so a failure between the two leaves the request
pending and a retry starts clean.
"""
import logging
from typing import Any

from sqlalchemy import update
from sqlalchemy.orm import Session

from booking_core.actors import Actor, Permission, require
from booking_core.errors import ConflictError, NotFoundError, ValidationError
from booking_core.transaction import transact
from models.enums import RegistrationStatus, SlotType
from models.registration import Registration
from models.station import Station
from repositories.registration_repository import create_registration, get_registration
from repositories.station_repository import build_station
from utils.timeutils import utcnow

LOG = logging.getLogger(__name__)

SLOT_TYPE_CHOICES = ("standard", "fast", "both")
DEFAULT_REJECTION_REASON = "Manual rejection by admin"


def generate_slots(total_slots: int, slot_types: str) -> list[tuple[int, str]]:
    """Return (number, slot_type) pairs for a new station.

    "both" alternates by 0-based index parity: even indices standard, odd indices fast.
    Any single type is applied to every slot.
    """
    if total_slots < 1:
        raise ValidationError("total_slots must be at least 1")
    if slot_types not in SLOT_TYPE_CHOICES:
        raise ValidationError(f"slot_types must be one of {', '.join(SLOT_TYPE_CHOICES)}")
    slots = []
    for index in range(total_slots):
        if slot_types == "both":
            slot_type = SlotType.standard.value if index % 2 == 0 else SlotType.fast.value
        else:
            slot_type = slot_types
        slots.append((index + 1, slot_type))
    return slots


def submit_registration(session: Session, data: dict[str, Any], actor: Actor | None = None) -> Registration:
    """Create a pending registration request. Anonymous submissions are allowed."""
    lat, lng = data.get("latitude"), data.get("longitude")
    if (lat is None) != (lng is None):
        raise ValidationError("latitude and longitude must be given together")
    # Fail early on bad slot settings rather than at approval time.
    generate_slots(int(data.get("total_slots") or 0), data.get("slot_types") or "standard")
    registration = create_registration(
        session,
        submitted_by=actor.user_id if actor is not None else "anonymous",
        submitted_email=actor.email if actor is not None else data["owner_email"],
        **data,
    )
    LOG.info("BUNK_REGISTRATION_SUBMITTED registration=%s name=%s", registration.id, registration.name)
    return registration


def _station_fields(registration: Registration) -> dict[str, Any]:
    return {
        "name": registration.name,
        "address": registration.address,
        "city": registration.city,
        "state": registration.state,
        "zip_code": registration.zip_code,
        "phone": registration.phone,
        "latitude": registration.latitude,
        "longitude": registration.longitude,
        "amenities": list(registration.amenities or []),
        "connector_types": list(registration.connector_types or []),
        "operating_hours": registration.operating_hours or "24/7",
        "pricing": registration.pricing or "",
        "owner_name": registration.owner_name,
        "owner_email": registration.owner_email,
        "owner_phone": registration.owner_phone,
        "registration_id": registration.id,
        "is_active": True,
    }


def _load_pending(session: Session, registration_id: str) -> Registration:
    registration = get_registration(session, registration_id)
    if registration is None:
        raise NotFoundError("Registration not found")
    if registration.status != RegistrationStatus.pending.value:
        raise ConflictError(f"Registration has already been {registration.status}")
    return registration


def _decide_guard(registration_id: str, values: dict[str, Any]):
    return (
        update(Registration)
        .where(Registration.id == registration_id, Registration.status == RegistrationStatus.pending.value)
        .values(**values)
    )


def approve_registration(session: Session, registration_id: str, reviewer: Actor) -> Station:
    """Approve a pending request and create its station with generated slots. Returns the station."""
    require(reviewer, Permission.review_registrations)
    registration = _load_pending(session, registration_id)
    slot_specs = generate_slots(registration.total_slots, registration.slot_types)
    station = build_station(slot_specs, **_station_fields(registration))
    reviewed_at = utcnow()

    def create_station(s: Session) -> Station:
        s.add(station)
        s.flush()
        s.execute(
            update(Registration)
            .where(Registration.id == registration_id)
            .values(station_id=station.id)
            .execution_options(synchronize_session=False)
        )
        return station

    guard = _decide_guard(
        registration_id,
        {
            "status": RegistrationStatus.approved.value,
            "reviewed_by": reviewer.user_id,
            "reviewed_at": reviewed_at,
        },
    )
    transact(session, guard, create_station, conflict_message="Registration has already been reviewed")
    session.refresh(station)
    session.refresh(registration)
    LOG.info(
        "BUNK_APPROVED registration=%s station=%s name=%s slots=%d",
        registration_id, station.id, station.name, len(slot_specs),
    )
    return station


def reject_registration(
    session: Session,
    registration_id: str,
    reviewer: Actor,
    reason: str | None = None,
) -> Registration:
    """Reject a pending request. No station is created."""
    require(reviewer, Permission.review_registrations)
    registration = _load_pending(session, registration_id)
    guard = _decide_guard(
        registration_id,
        {
            "status": RegistrationStatus.rejected.value,
            "reviewed_by": reviewer.user_id,
            "reviewed_at": utcnow(),
            "rejection_reason": (reason or "").strip() or DEFAULT_REJECTION_REASON,
        },
    )
    transact(session, guard, lambda s: None, conflict_message="Registration has already been reviewed")
    session.refresh(registration)
    LOG.info("BUNK_REJECTED registration=%s name=%s", registration_id, registration.name)
    return registration
