"""Pydantic schemas for station registration requests."""
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator


class RegistrationCreate(BaseModel):
    """Payload for POST /registrations (the public "register your bunk" form)."""

    name: str = Field(min_length=1, max_length=255)
    address: str = Field(min_length=1, max_length=512)
    city: str = Field(min_length=1)
    state: str = Field(min_length=1)
    zip_code: str = Field(min_length=1)
    phone: str | None = None
    latitude: float | None = Field(default=None, ge=-90, le=90)
    longitude: float | None = Field(default=None, ge=-180, le=180)
    owner_name: str = Field(min_length=1)
    owner_email: EmailStr
    owner_phone: str = Field(min_length=1)
    total_slots: int = Field(ge=1, le=100)
    slot_types: Literal["standard", "fast", "both"] = "standard"
    amenities: list[str] = Field(default_factory=list)
    connector_types: list[str] = Field(default_factory=list)
    operating_hours: str = "24/7"
    pricing: str | None = None

    @model_validator(mode="after")
    def _coordinates_together(self):
        if (self.latitude is None) != (self.longitude is None):
            raise ValueError("latitude and longitude must be given together")
        return self


class RegistrationResponse(BaseModel):
    """Registration request in API responses."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    address: str
    city: str
    state: str
    zip_code: str
    phone: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    owner_name: str
    owner_email: str
    owner_phone: str
    total_slots: int
    slot_types: str
    amenities: list[str] | None = None
    connector_types: list[str] | None = None
    operating_hours: str
    pricing: str | None = None
    status: str
    submitted_by: str
    submitted_email: str
    submitted_at: datetime
    reviewed_by: str | None = None
    reviewed_at: datetime | None = None
    rejection_reason: str | None = None
    station_id: str | None = None


class RejectRequest(BaseModel):
    reason: str | None = None
