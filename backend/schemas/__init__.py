# Schemas package
from .bookings import BookingCreate, BookingCreated, BookingResponse
from .health import HealthResponse
from .registrations import RegistrationCreate, RegistrationResponse
from .stations import StationDetail, StationSummary

__all__ = [
    "BookingCreate",
    "BookingCreated",
    "BookingResponse",
    "HealthResponse",
    "RegistrationCreate",
    "RegistrationResponse",
    "StationDetail",
    "StationSummary",
]
