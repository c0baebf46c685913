"""Pydantic schemas for sign-up, sign-in and password reset."""
from typing import Literal

from pydantic import BaseModel, EmailStr, Field


class RegisterRequest(BaseModel):
    """Payload for POST /auth/register."""

    name: str = Field(min_length=1, max_length=255)
    email: EmailStr
    password: str
    confirm_password: str | None = None
    phone: str | None = None
    role: Literal["user", "admin"] = "user"


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    """Bearer token plus the role as a UI hint. The server re-reads the role on every request."""

    access_token: str
    token_type: str = "bearer"
    user_id: str
    email: str
    name: str
    role: str


class PasswordResetRequest(BaseModel):
    email: EmailStr


class PasswordResetConfirm(BaseModel):
    token: str
    new_password: str
    confirm_password: str | None = None


class MessageResponse(BaseModel):
    message: str
