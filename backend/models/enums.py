"""String enums stored in model columns."""
from enum import Enum


class Role(str, Enum):
    """Coarse actor classification. Closed: every authorization check handles both."""
    user = "user"
    admin = "admin"


class SlotStatus(str, Enum):
    available = "available"
    occupied = "occupied"


class SlotType(str, Enum):
    standard = "standard"
    fast = "fast"


class BookingStatus(str, Enum):
    active = "active"
    completed = "completed"
    cancelled = "cancelled"


class RegistrationStatus(str, Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"
