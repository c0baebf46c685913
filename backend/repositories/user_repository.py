"""User repository: get, create, update, counts."""
from typing import Any, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from models.enums import Role
from models.user import User
from utils.timeutils import utcnow

EDITABLE_PROFILE_FIELDS = ("name", "phone", "vehicle_type")


def normalize_email(email: str) -> str:
    """Emails are stored and compared lower-cased and stripped."""
    return email.strip().lower()


def create_user(
    session: Session,
    *,
    name: str,
    email: str,
    password_hash: str,
    phone: str | None = None,
    role: Role = Role.user,
) -> User:
    """Create a user, commit, and return it."""
    user = User(
        name=name,
        email=normalize_email(email),
        password_hash=password_hash,
        phone=phone,
        role=role.value,
    )
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


def get_user(session: Session, user_id: str) -> Optional[User]:
    """Return user by id or None."""
    return session.get(User, user_id)


def get_user_by_email(session: Session, email: str) -> Optional[User]:
    """Return user by email (case-insensitive) or None."""
    return session.execute(
        select(User).where(User.email == normalize_email(email))
    ).scalar_one_or_none()


def update_profile(session: Session, user: User, updates: dict[str, Any]) -> User:
    """Apply profile field updates (name, phone, vehicle_type), stamp updated_at, commit."""
    for key, value in updates.items():
        if key in EDITABLE_PROFILE_FIELDS:
            setattr(user, key, value)
    user.updated_at = utcnow()
    session.commit()
    session.refresh(user)
    return user


def count_users(session: Session, role: Role | None = None) -> int:
    """Return the number of users, optionally of one role."""
    stmt = select(func.count()).select_from(User)
    if role is not None:
        stmt = stmt.where(User.role == role.value)
    return session.execute(stmt).scalar() or 0
