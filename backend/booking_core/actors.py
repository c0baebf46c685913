"""Actors and authorization checks.

An Actor is rebuilt from the user row on every request and passed explicitly to the
core operations. Nothing here reads client-side state: the role a client caches after
sign-in is only a UI hint and never reaches these checks.
"""
from dataclasses import dataclass
from enum import Enum

from booking_core.errors import AuthorizationError
from models.enums import Role


class Permission(str, Enum):
    book_slot = "book_slot"
    manage_own_bookings = "manage_own_bookings"
    manage_stations = "manage_stations"
    manage_slots = "manage_slots"
    review_registrations = "review_registrations"
    view_all_bookings = "view_all_bookings"


_USER_PERMISSIONS = frozenset({Permission.book_slot, Permission.manage_own_bookings})
_ADMIN_PERMISSIONS = frozenset(Permission)


def permissions_for(role: Role) -> frozenset[Permission]:
    """Permissions granted to a role. Every Role member must be handled here."""
    match role:
        case Role.user:
            return _USER_PERMISSIONS
        case Role.admin:
            return _ADMIN_PERMISSIONS
    raise ValueError(f"Unhandled role: {role!r}")


@dataclass(frozen=True)
class Actor:
    """The authenticated caller of a core operation."""

    user_id: str
    email: str
    role: Role

    @classmethod
    def from_user(cls, user) -> "Actor":
        """Build from a User row; the stored role is authoritative."""
        return cls(user_id=user.id, email=user.email, role=Role(user.role))

    @property
    def is_admin(self) -> bool:
        return self.role is Role.admin

    def can(self, permission: Permission) -> bool:
        return permission in permissions_for(self.role)


def require(actor: Actor | None, permission: Permission) -> Actor:
    """Return actor if it holds permission; raise AuthorizationError otherwise."""
    if actor is None or not actor.can(permission):
        raise AuthorizationError("You do not have permission to perform this action")
    return actor


def require_admin(actor: Actor | None) -> Actor:
    """Shortcut for admin-only operations."""
    if actor is None or not actor.is_admin:
        raise AuthorizationError("You do not have permission to perform this action (Admin Only)")
    return actor


def require_owner_or_admin(actor: Actor | None, owner_id: str | None) -> Actor:
    """Allow the record owner or any admin."""
    if actor is None:
        raise AuthorizationError("You do not have permission to perform this action")
    if actor.is_admin or (owner_id is not None and owner_id == actor.user_id):
        return actor
    raise AuthorizationError("You can only manage your own bookings")
