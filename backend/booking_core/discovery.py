"""Station discovery: distance, availability, filtering and sorting.

Pure functions over loaded stations; nothing here touches the database.
"""
import math
import unicodedata
from dataclasses import dataclass

from booking_core.errors import ValidationError
from models.enums import SlotStatus, SlotType
from models.station import Station

EARTH_RADIUS_KM = 6371.0
ALL_LOCATIONS = "All Locations"
ALL_TYPES = "All Types"
FAST_CONNECTORS = frozenset({"CCS", "CHAdeMO", "Tesla Supercharger"})
SORT_KEYS = ("distance", "availability", "name", "city")

Coordinate = tuple[float, float]


def haversine_km(a: Coordinate, b: Coordinate) -> float:
    """Great-circle distance in km between two (lat, lng) points."""
    lat1, lng1 = a
    lat2, lng2 = b
    d_lat = math.radians(lat2 - lat1)
    d_lng = math.radians(lng2 - lng1)
    h = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lng / 2) ** 2
    )
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def format_distance(km: float) -> str:
    return f"{km:.1f} km"


@dataclass
class StationView:
    """A station as shown in discovery, with derived availability and distance."""

    station: Station
    available_slots: int
    total_slots: int
    distance_km: float | None = None

    @classmethod
    def from_station(cls, station: Station, origin: Coordinate | None = None) -> "StationView":
        slots = list(station.slots or [])
        available = sum(1 for s in slots if s.status == SlotStatus.available.value)
        distance = None
        if origin is not None and station.latitude is not None and station.longitude is not None:
            distance = haversine_km(origin, (station.latitude, station.longitude))
        return cls(station=station, available_slots=available, total_slots=len(slots), distance_km=distance)

    @property
    def distance(self) -> str | None:
        if self.distance_km is None:
            return None
        return format_distance(self.distance_km)

    @property
    def availability_ratio(self) -> float:
        if self.total_slots == 0:
            return 0.0
        return self.available_slots / self.total_slots

    @property
    def has_fast_charging(self) -> bool:
        if any(c in FAST_CONNECTORS for c in (self.station.connector_types or [])):
            return True
        return any(s.slot_type == SlotType.fast.value for s in (self.station.slots or []))


@dataclass
class StationFilter:
    """Discovery filters. Every active filter must hold (AND)."""

    search: str | None = None
    location: str | None = None
    charger_type: str | None = None
    available_now: bool = False
    min_available: int | None = None
    fast_charging: bool = False
    twenty_four_seven: bool = False

    def matches(self, view: StationView) -> bool:
        station = view.station
        if self.search:
            needle = self.search.strip().lower()
            haystack = (station.name, station.address, station.city, station.state)
            if not any(needle in (field or "").lower() for field in haystack):
                return False
        if self.location and self.location != ALL_LOCATIONS:
            if self.location not in (station.city, station.state):
                return False
        if self.charger_type and self.charger_type != ALL_TYPES:
            if self.charger_type not in (station.connector_types or []):
                return False
        if self.available_now and view.available_slots <= 0:
            return False
        if self.min_available is not None and view.available_slots < self.min_available:
            return False
        if self.fast_charging and not view.has_fast_charging:
            return False
        if self.twenty_four_seven and station.operating_hours != "24/7":
            return False
        return True


def apply_filters(views: list[StationView], station_filter: StationFilter) -> list[StationView]:
    """Return the views matching every active filter. An empty list is a valid result."""
    return [v for v in views if station_filter.matches(v)]


def collation_key(text: str) -> tuple[str, str]:
    """Sort key that orders accented letters with their base letter, then by exact form.

    "Élan" sorts between "Eden" and "Ezra", as a browser's localeCompare would put it.
    """
    folded = text.casefold()
    base = "".join(ch for ch in unicodedata.normalize("NFKD", folded) if not unicodedata.combining(ch))
    return base, folded


def sort_stations(views: list[StationView], key: str) -> list[StationView]:
    """Return views sorted by key (distance, availability, name, city)."""
    match key:
        case "distance":
            # Unknown distance sorts last.
            return sorted(views, key=lambda v: (v.distance_km is None, v.distance_km or 0.0))
        case "availability":
            return sorted(views, key=lambda v: v.availability_ratio, reverse=True)
        case "name":
            return sorted(views, key=lambda v: collation_key(v.station.name))
        case "city":
            return sorted(views, key=lambda v: collation_key(v.station.city or ""))
    raise ValidationError(f"Unknown sort key {key!r}; expected one of {', '.join(SORT_KEYS)}")


def location_options(stations: list[Station]) -> list[str]:
    """"All Locations", then distinct cities, then distinct states, in first-seen order."""
    cities = list(dict.fromkeys(s.city for s in stations if s.city))
    states = list(dict.fromkeys(s.state for s in stations if s.state))
    return [ALL_LOCATIONS, *cities, *states]
