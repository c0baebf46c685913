"""Dashboard API routes: admin overview and the signed-in user's summary."""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from api.deps import get_admin_actor, get_current_user
from booking_core.actors import Actor
from db import get_db
from models.enums import BookingStatus, RegistrationStatus, Role
from models.user import User
from repositories.booking_repository import (
    count_active_bookings_for_user,
    count_bookings,
    list_bookings,
    list_bookings_for_user,
)
from repositories.registration_repository import count_registrations
from repositories.station_repository import count_stations, slot_status_counts
from repositories.user_repository import count_users
from schemas.bookings import BookingResponse
from schemas.dashboard import AdminDashboard, UserDashboard
from schemas.users import ProfileResponse

RECENT_BOOKINGS = 5

router = APIRouter(tags=["dashboard"])


@router.get("/admin/dashboard", response_model=AdminDashboard)
def admin_dashboard(
    actor: Actor = Depends(get_admin_actor),
    db: Session = Depends(get_db),
) -> AdminDashboard:
    slots = slot_status_counts(db)
    return AdminDashboard(
        total_stations=count_stations(db),
        total_slots=slots["total"],
        available_slots=slots["available"],
        occupied_slots=slots["occupied"],
        total_users=count_users(db, Role.user),
        pending_registrations=count_registrations(db, RegistrationStatus.pending.value),
        active_bookings=count_bookings(db, BookingStatus.active.value),
        recent_bookings=[
            BookingResponse.model_validate(b) for b in list_bookings(db, limit=RECENT_BOOKINGS)
        ],
    )


@router.get("/dashboard", response_model=UserDashboard)
def user_dashboard(user: User = Depends(get_current_user), db: Session = Depends(get_db)) -> UserDashboard:
    return UserDashboard(
        profile=ProfileResponse.model_validate(user),
        active_bookings=count_active_bookings_for_user(db, user.id),
        recent_bookings=[
            BookingResponse.model_validate(b)
            for b in list_bookings_for_user(db, user.id, limit=RECENT_BOOKINGS)
        ],
    )
