"""Pydantic schemas for booking API."""
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class BookingCreate(BaseModel):
    """Payload for POST /stations/{id}/bookings."""

    slot_number: int = Field(ge=1)
    booking_time: datetime


class BookingResponse(BaseModel):
    """Booking in API responses."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str | None = None
    user_email: str
    station_id: str | None = None
    station_name: str
    slot_number: int
    booking_time: datetime
    status: str
    created_at: datetime
    updated_at: datetime | None = None


class BookingCreated(BaseModel):
    """Response for a successful booking."""

    booking_id: str
    slot_number: int
    slot_status: str
    booking: BookingResponse
