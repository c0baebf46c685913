"""Auth API routes: register, login, logout, password reset."""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from api.deps import get_current_user
from auth.service import (
    AuthSession,
    request_password_reset,
    reset_password,
    sign_in,
    sign_out,
    sign_up,
)
from db import get_db
from models.enums import Role
from models.user import User
from schemas.auth import (
    LoginRequest,
    MessageResponse,
    PasswordResetConfirm,
    PasswordResetRequest,
    RegisterRequest,
    TokenResponse,
)

router = APIRouter(prefix="/auth", tags=["auth"])

RESET_REQUESTED_MESSAGE = "If an account exists for that email, a reset link has been sent."


def token_response(auth: AuthSession) -> TokenResponse:
    return TokenResponse(
        access_token=auth.access_token,
        user_id=auth.user.id,
        email=auth.user.email,
        name=auth.user.name,
        role=auth.role,
    )


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
def register(body: RegisterRequest, db: Session = Depends(get_db)) -> TokenResponse:
    """Create an account and return a bearer token."""
    auth = sign_up(
        db,
        name=body.name,
        email=body.email,
        password=body.password,
        confirm_password=body.confirm_password,
        phone=body.phone,
        role=Role(body.role),
    )
    return token_response(auth)


@router.post("/login", response_model=TokenResponse)
def login(body: LoginRequest, db: Session = Depends(get_db)) -> TokenResponse:
    return token_response(sign_in(db, body.email, body.password))


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(user: User = Depends(get_current_user), db: Session = Depends(get_db)) -> None:
    """Revoke every token issued to the caller."""
    sign_out(db, user)


@router.post("/password-reset", response_model=MessageResponse, status_code=status.HTTP_202_ACCEPTED)
def password_reset(body: PasswordResetRequest, db: Session = Depends(get_db)) -> MessageResponse:
    """Send a reset link. Same response whether or not the email is registered."""
    request_password_reset(db, body.email)
    return MessageResponse(message=RESET_REQUESTED_MESSAGE)


@router.post("/password-reset/confirm", response_model=MessageResponse)
def password_reset_confirm(body: PasswordResetConfirm, db: Session = Depends(get_db)) -> MessageResponse:
    reset_password(db, body.token, body.new_password, body.confirm_password)
    return MessageResponse(message="Password has been reset. Please sign in.")
