"""Pydantic schemas for the profile API."""
from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr


class ProfileResponse(BaseModel):
    """User profile in API responses. Never includes credentials."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    phone: str | None = None
    role: str
    vehicle_type: str | None = None
    created_at: datetime
    updated_at: datetime | None = None


class ProfileUpdate(BaseModel):
    """Payload for PATCH /profile (all fields optional)."""

    name: str | None = None
    phone: str | None = None
    vehicle_type: str | None = None


class PasswordChange(BaseModel):
    current_password: str
    new_password: str
    confirm_password: str | None = None


class EmailChange(BaseModel):
    current_password: str
    new_email: EmailStr
