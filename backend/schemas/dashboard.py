"""Pydantic schemas for the user and admin dashboards."""
from pydantic import BaseModel

from schemas.bookings import BookingResponse
from schemas.users import ProfileResponse


class AdminDashboard(BaseModel):
    """Counts across the system plus the most recent bookings."""

    total_stations: int
    total_slots: int
    available_slots: int
    occupied_slots: int
    total_users: int
    pending_registrations: int
    active_bookings: int
    recent_bookings: list[BookingResponse]


class UserDashboard(BaseModel):
    profile: ProfileResponse
    active_bookings: int
    recent_bookings: list[BookingResponse]
