"""Map view selection with a fallback when the client could not get a location."""
from dataclasses import dataclass

DEFAULT_CENTER = (20.5937, 78.9629)
DEFAULT_ZOOM = 5
USER_ZOOM = 12
CITY_ZOOM = 12
STATE_ZOOM = 8

CITY_CENTERS = {
    "New Delhi": (28.6139, 77.2090),
    "Mumbai": (19.0760, 72.8777),
    "Bangalore": (12.9716, 77.5946),
    "Chennai": (13.0827, 80.2707),
    "Kolkata": (22.5726, 88.3639),
    "Hyderabad": (17.3850, 78.4867),
    "Pune": (18.5204, 73.8567),
    "Ahmedabad": (23.0225, 72.5714),
    "Jaipur": (26.9124, 75.7873),
    "Lucknow": (26.8467, 80.9462),
}

# Approximate state centers.
STATE_CENTERS = {
    "Delhi": (28.6139, 77.2090),
    "Maharashtra": (19.7515, 75.7139),
    "Karnataka": (15.3173, 75.7139),
    "Tamil Nadu": (11.1271, 78.6569),
    "West Bengal": (22.9868, 87.8550),
    "Telangana": (17.1232, 79.2088),
    "Gujarat": (22.2587, 71.1924),
    "Rajasthan": (27.0238, 74.2179),
    "Uttar Pradesh": (26.8467, 80.9462),
}

FAILURE_MESSAGES = {
    "permission_denied": "Location permission denied. Showing Indian charging stations.",
    "unavailable": "Location information unavailable. Showing Indian charging stations.",
    "timeout": "Location request timed out. Showing Indian charging stations.",
    "unsupported": "Geolocation is not supported by this browser.",
    "unknown": "An unknown error occurred. Showing Indian charging stations.",
}


@dataclass(frozen=True)
class MapView:
    center: tuple[float, float]
    zoom: int
    message: str | None = None


def failure_message(code: str | None) -> str:
    return FAILURE_MESSAGES.get(code or "unknown", FAILURE_MESSAGES["unknown"])


def resolve_map_view(
    user_coord: tuple[float, float] | None,
    location: str | None = None,
    failure: str | None = None,
) -> MapView:
    """Pick the map center and zoom.

    A known city or state filter wins, then the user's position, then the default
    regional view (with a message when the client reported a geolocation failure).
    """
    if location in CITY_CENTERS:
        return MapView(CITY_CENTERS[location], CITY_ZOOM)
    if location in STATE_CENTERS:
        return MapView(STATE_CENTERS[location], STATE_ZOOM)
    if user_coord is not None:
        return MapView(tuple(user_coord), USER_ZOOM)
    message = failure_message(failure) if failure else None
    return MapView(DEFAULT_CENTER, DEFAULT_ZOOM, message)
