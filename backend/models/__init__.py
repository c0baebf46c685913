"""SQLAlchemy declarative base and models."""
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all DB models."""
    pass


# Register every table with Base so relationships resolve regardless of import order.
from models.user import User  # noqa: E402,F401
from models.station import Station  # noqa: E402,F401
from models.slot import Slot  # noqa: E402,F401
from models.booking import Booking  # noqa: E402,F401
from models.registration import Registration  # noqa: E402,F401
