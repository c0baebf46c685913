"""Registration repository: create, get, list, count."""
from typing import Any, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from models.enums import RegistrationStatus
from models.registration import Registration


def create_registration(session: Session, **fields: Any) -> Registration:
    """Create a pending registration request, commit, and return it."""
    registration = Registration(status=RegistrationStatus.pending.value, **fields)
    session.add(registration)
    session.commit()
    session.refresh(registration)
    return registration


def get_registration(session: Session, registration_id: str) -> Optional[Registration]:
    """Return registration by id or None."""
    return session.get(Registration, registration_id)


def list_registrations(session: Session, status: str | None = None) -> list[Registration]:
    """Return registrations (oldest submission first), optionally filtered by status."""
    stmt = select(Registration).order_by(Registration.submitted_at)
    if status:
        stmt = stmt.where(Registration.status == status)
    return list(session.execute(stmt).scalars().all())


def count_registrations(session: Session, status: str | None = None) -> int:
    """Return the number of registrations, optionally with one status."""
    stmt = select(func.count()).select_from(Registration)
    if status:
        stmt = stmt.where(Registration.status == status)
    return session.execute(stmt).scalar() or 0
