"""Demo stations seeded into an empty database."""
import logging

from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from booking_core.errors import TransientServiceError
from models.enums import SlotStatus, SlotType
from repositories.station_repository import build_station, count_stations

LOG = logging.getLogger(__name__)

DEMO_STATIONS = [
    {
        "name": "Delhi EV Charging Hub",
        "address": "Connaught Place, New Delhi",
        "city": "New Delhi",
        "state": "Delhi",
        "latitude": 28.6315,
        "longitude": 77.2167,
        "amenities": ["Fast Charging", "Cafe", "Restrooms", "Wi-Fi"],
        "pricing": "₹5.00/kWh",
        "connector_types": ["CCS", "Type 2", "Bharat DC-001"],
        "operating_hours": "24/7",
        "available_slots": 4,
        "total_slots": 10,
    },
    {
        "name": "Mumbai Power Station",
        "address": "Bandra Kurla Complex, Mumbai",
        "city": "Mumbai",
        "state": "Maharashtra",
        "latitude": 19.0662,
        "longitude": 72.8640,
        "amenities": ["Fast Charging", "Covered Parking", "Convenience Store"],
        "pricing": "₹5.50/kWh",
        "connector_types": ["CCS", "CHAdeMO"],
        "operating_hours": "6:00 AM - 11:00 PM",
        "available_slots": 2,
        "total_slots": 8,
    },
    {
        "name": "Bangalore EV Point",
        "address": "MG Road, Bangalore",
        "city": "Bangalore",
        "state": "Karnataka",
        "latitude": 12.9758,
        "longitude": 77.6045,
        "amenities": ["Standard Charging", "Coffee Shop", "Wi-Fi"],
        "pricing": "₹4.80/kWh",
        "connector_types": ["Type 2", "Bharat AC-001"],
        "operating_hours": "24/7",
        "available_slots": 6,
        "total_slots": 12,
    },
    {
        "name": "Chennai EV Hub",
        "address": "Anna Nagar, Chennai",
        "city": "Chennai",
        "state": "Tamil Nadu",
        "latitude": 13.0850,
        "longitude": 80.2101,
        "amenities": ["Fast Charging", "Restrooms"],
        "pricing": "₹5.20/kWh",
        "connector_types": ["CCS", "Type 2"],
        "operating_hours": "7:00 AM - 10:00 PM",
        "available_slots": 3,
        "total_slots": 6,
    },
    {
        "name": "Kolkata Charging Point",
        "address": "Park Street, Kolkata",
        "city": "Kolkata",
        "state": "West Bengal",
        "latitude": 22.5515,
        "longitude": 88.3510,
        "amenities": ["Fast Charging", "Cafe", "Wi-Fi"],
        "pricing": "₹5.10/kWh",
        "connector_types": ["CCS", "CHAdeMO", "Type 2"],
        "operating_hours": "24/7",
        "available_slots": 5,
        "total_slots": 8,
    },
]


def seed_demo_stations(session: Session) -> int:
    """Insert the demo stations if no station exists. Returns how many were created.

    The first (total - available) slots of each station start occupied.
    """
    if count_stations(session) > 0:
        return 0
    for demo in DEMO_STATIONS:
        fields = dict(demo)
        available = fields.pop("available_slots")
        total = fields.pop("total_slots")
        station = build_station([(n, SlotType.standard.value) for n in range(1, total + 1)], **fields)
        for slot in station.slots[: total - available]:
            slot.status = SlotStatus.occupied.value
        session.add(station)
    try:
        session.commit()
    except OperationalError as e:
        session.rollback()
        raise TransientServiceError("Storage temporarily unavailable while seeding") from e
    LOG.info("Seeded %d demo stations", len(DEMO_STATIONS))
    return len(DEMO_STATIONS)
