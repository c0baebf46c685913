"""Booking API routes: own bookings, cancel, complete, admin listing."""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from api.deps import get_admin_actor, get_current_actor
from booking_core.actors import Actor
from booking_core.coordinator import cancel_booking, complete_booking
from db import get_db
from models.enums import BookingStatus
from repositories.booking_repository import list_bookings, list_bookings_for_user
from schemas.bookings import BookingResponse

router = APIRouter(tags=["bookings"])


@router.get("/bookings/me", response_model=list[BookingResponse])
def my_bookings(
    limit: int | None = Query(default=None, ge=1, le=500),
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
) -> list[BookingResponse]:
    """The caller's bookings, latest booking time first."""
    rows = list_bookings_for_user(db, actor.user_id, limit=limit)
    return [BookingResponse.model_validate(b) for b in rows]


@router.post("/bookings/{booking_id}/cancel", response_model=BookingResponse)
def post_cancel(
    booking_id: str,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
) -> BookingResponse:
    return BookingResponse.model_validate(cancel_booking(db, booking_id, actor))


@router.post("/bookings/{booking_id}/complete", response_model=BookingResponse)
def post_complete(
    booking_id: str,
    actor: Actor = Depends(get_admin_actor),
    db: Session = Depends(get_db),
) -> BookingResponse:
    return BookingResponse.model_validate(complete_booking(db, booking_id, actor))


@router.get("/admin/bookings", response_model=list[BookingResponse])
def all_bookings(
    status: BookingStatus | None = None,
    station_id: str | None = None,
    limit: int | None = Query(default=None, ge=1, le=500),
    actor: Actor = Depends(get_admin_actor),
    db: Session = Depends(get_db),
) -> list[BookingResponse]:
    """All bookings, newest first (admin)."""
    rows = list_bookings(db, status=status.value if status else None, station_id=station_id, limit=limit)
    return [BookingResponse.model_validate(b) for b in rows]
