"""Account operations: sign-up, sign-in, sign-out, password reset and credential changes.

Tokens carry the user's session_version; bumping it (sign-out, password or email
change, reset) revokes every token issued before.
"""
import logging
from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from auth.notifier import send_reset_email
from auth.security import (
    ACCESS_SCOPE,
    RESET_SCOPE,
    decode_token,
    hash_password,
    make_access_token,
    make_reset_token,
    verify_password,
)
from booking_core.errors import AuthenticationError, ConflictError, ValidationError
from models.enums import Role
from models.user import User
from repositories.user_repository import create_user, get_user, get_user_by_email, normalize_email
from utils.config import ADMIN_EMAIL_MARKER, MIN_PASSWORD_LENGTH
from utils.timeutils import utcnow

LOG = logging.getLogger(__name__)


@dataclass
class AuthSession:
    """A signed-in user and the bearer token issued for them."""

    user: User
    access_token: str

    @property
    def role(self) -> str:
        return self.user.role


def _check_new_password(password: str, confirm_password: str | None) -> None:
    if confirm_password is not None and password != confirm_password:
        raise ValidationError("Passwords do not match")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")


def _issue(user: User) -> AuthSession:
    return AuthSession(user=user, access_token=make_access_token(user.id, user.session_version))


def _bump_session(session: Session, user: User) -> None:
    user.session_version = (user.session_version or 0) + 1
    user.updated_at = utcnow()


def sign_up(
    session: Session,
    *,
    name: str,
    email: str,
    password: str,
    confirm_password: str | None = None,
    phone: str | None = None,
    role: Role = Role.user,
) -> AuthSession:
    """Create an account and sign it in. Admin accounts need an email with the admin marker."""
    if not name or not name.strip():
        raise ValidationError("Name is required")
    _check_new_password(password, confirm_password)
    email = normalize_email(email)
    if role is Role.admin and ADMIN_EMAIL_MARKER not in email:
        raise ValidationError("Admin registration requires an admin email address")
    if get_user_by_email(session, email) is not None:
        raise ConflictError("An account with this email already exists")
    try:
        user = create_user(
            session,
            name=name.strip(),
            email=email,
            password_hash=hash_password(password),
            phone=phone,
            role=role,
        )
    except IntegrityError as e:
        session.rollback()
        raise ConflictError("An account with this email already exists") from e
    LOG.info("USER_REGISTRATION_SUCCESS user=%s email=%s role=%s", user.id, user.email, user.role)
    return _issue(user)


def sign_in(session: Session, email: str, password: str) -> AuthSession:
    user = get_user_by_email(session, email)
    if user is None or not verify_password(password, user.password_hash):
        LOG.warning("USER_LOGIN_FAILED email=%s", normalize_email(email))
        raise AuthenticationError("Invalid email or password")
    LOG.info("USER_LOGIN_SUCCESS user=%s role=%s", user.id, user.role)
    return _issue(user)


def sign_out(session: Session, user: User) -> None:
    """Revoke all tokens issued to the user so far."""
    _bump_session(session, user)
    session.commit()
    LOG.info("USER_LOGOUT user=%s", user.id)


def authenticate_token(session: Session, token: str | None) -> User:
    """Return the user a bearer token belongs to, or raise AuthenticationError."""
    if not token:
        raise AuthenticationError("Not authenticated")
    claims = decode_token(token, ACCESS_SCOPE)
    if claims is None:
        raise AuthenticationError("Could not validate credentials")
    user = get_user(session, claims["sub"])
    if user is None or user.session_version != claims["ver"]:
        raise AuthenticationError("Session expired, please sign in again")
    return user


def request_password_reset(session: Session, email: str) -> None:
    """Mail a reset link if the account exists. Silent either way."""
    user = get_user_by_email(session, email)
    if user is None:
        LOG.info("PASSWORD_RESET_UNKNOWN_EMAIL email=%s", normalize_email(email))
        return
    send_reset_email(user.email, make_reset_token(user.id, user.session_version))


def reset_password(session: Session, token: str, new_password: str, confirm_password: str | None = None) -> None:
    """Set a new password from a reset token. The token cannot be used twice."""
    claims = decode_token(token, RESET_SCOPE)
    if claims is None:
        raise ValidationError("Reset link is invalid or has expired")
    user = get_user(session, claims["sub"])
    if user is None or user.session_version != claims["ver"]:
        raise ValidationError("Reset link is invalid or has expired")
    _check_new_password(new_password, confirm_password)
    user.password_hash = hash_password(new_password)
    _bump_session(session, user)
    session.commit()
    LOG.info("PASSWORD_RESET_SUCCESS user=%s", user.id)


def reauthenticate(user: User, current_password: str) -> None:
    if not verify_password(current_password, user.password_hash):
        raise AuthenticationError("Current password is incorrect")


def change_password(
    session: Session,
    user: User,
    *,
    current_password: str,
    new_password: str,
    confirm_password: str | None = None,
) -> AuthSession:
    """Change password after re-authentication. Returns a fresh token; older ones stop working."""
    reauthenticate(user, current_password)
    _check_new_password(new_password, confirm_password)
    user.password_hash = hash_password(new_password)
    _bump_session(session, user)
    session.commit()
    session.refresh(user)
    LOG.info("PASSWORD_CHANGED user=%s", user.id)
    return _issue(user)


def change_email(session: Session, user: User, *, current_password: str, new_email: str) -> AuthSession:
    """Change email after re-authentication. The new address must be unused."""
    reauthenticate(user, current_password)
    new_email = normalize_email(new_email)
    if new_email == user.email:
        return _issue(user)
    if user.role == Role.admin.value and ADMIN_EMAIL_MARKER not in new_email:
        raise ValidationError("Admin accounts need an admin email address")
    if get_user_by_email(session, new_email) is not None:
        raise ConflictError("An account with this email already exists")
    old_email = user.email
    user.email = new_email
    _bump_session(session, user)
    try:
        session.commit()
    except IntegrityError as e:
        session.rollback()
        raise ConflictError("An account with this email already exists") from e
    session.refresh(user)
    LOG.info("EMAIL_CHANGED user=%s from=%s to=%s", user.id, old_email, new_email)
    return _issue(user)
