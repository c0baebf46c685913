"""Registration API routes: public submission and admin review."""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from api.deps import get_admin_actor, get_optional_actor
from api.stations import station_detail
from booking_core.actors import Actor
from booking_core.approval import approve_registration, reject_registration, submit_registration
from db import get_db
from models.enums import RegistrationStatus
from repositories.registration_repository import list_registrations as repo_list_registrations
from schemas.registrations import RegistrationCreate, RegistrationResponse, RejectRequest
from schemas.stations import StationDetail

router = APIRouter(prefix="/registrations", tags=["registrations"])


@router.post("", response_model=RegistrationResponse, status_code=status.HTTP_201_CREATED)
def create_registration(
    body: RegistrationCreate,
    actor: Actor | None = Depends(get_optional_actor),
    db: Session = Depends(get_db),
) -> RegistrationResponse:
    """Submit a station for review. Signing in is optional."""
    registration = submit_registration(db, body.model_dump(), actor)
    return RegistrationResponse.model_validate(registration)


@router.get("", response_model=list[RegistrationResponse])
def list_registrations(
    status: RegistrationStatus | None = RegistrationStatus.pending,
    actor: Actor = Depends(get_admin_actor),
    db: Session = Depends(get_db),
) -> list[RegistrationResponse]:
    """Registration requests with a status (pending by default), oldest first."""
    rows = repo_list_registrations(db, status.value if status else None)
    return [RegistrationResponse.model_validate(r) for r in rows]


@router.post("/{registration_id}/approve", response_model=StationDetail)
def approve(
    registration_id: str,
    actor: Actor = Depends(get_admin_actor),
    db: Session = Depends(get_db),
) -> StationDetail:
    """Approve a pending request; returns the created station. 409 if already reviewed."""
    station = approve_registration(db, registration_id, actor)
    return station_detail(station)


@router.post("/{registration_id}/reject", response_model=RegistrationResponse)
def reject(
    registration_id: str,
    body: RejectRequest | None = None,
    actor: Actor = Depends(get_admin_actor),
    db: Session = Depends(get_db),
) -> RegistrationResponse:
    registration = reject_registration(db, registration_id, actor, body.reason if body else None)
    return RegistrationResponse.model_validate(registration)
