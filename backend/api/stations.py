"""Station API routes: discovery, detail, admin management, slot toggles and booking."""
import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from api.deps import get_admin_actor, get_current_actor, get_optional_actor
from booking_core.actors import Actor
from booking_core.coordinator import book_slot, set_slot_status
from booking_core.discovery import (
    StationFilter,
    StationView,
    apply_filters,
    location_options,
    sort_stations,
)
from booking_core.errors import NotFoundError, ValidationError
from booking_core.geolocation import resolve_map_view
from db import get_db
from models.enums import SlotStatus
from models.station import Station
from repositories.station_repository import (
    create_station as repo_create_station,
    delete_station as repo_delete_station,
    get_station,
    list_stations as repo_list_stations,
    update_station as repo_update_station,
)
from schemas.bookings import BookingCreate, BookingCreated, BookingResponse
from schemas.stations import (
    MapViewResponse,
    SlotResponse,
    SlotStatusUpdate,
    StationCreate,
    StationDetail,
    StationListResponse,
    StationSummary,
    StationUpdate,
)

LOG = logging.getLogger(__name__)

router = APIRouter(prefix="/stations", tags=["stations"])

# Columns that cannot be cleared by PATCH; an explicit null is ignored.
REQUIRED_STATION_FIELDS = ("name", "address", "city", "state", "zip_code", "operating_hours", "is_active")


def _summary(view: StationView) -> StationSummary:
    s = view.station
    return StationSummary(
        id=s.id,
        name=s.name,
        address=s.address,
        city=s.city,
        state=s.state,
        latitude=s.latitude,
        longitude=s.longitude,
        amenities=list(s.amenities or []),
        connector_types=list(s.connector_types or []),
        operating_hours=s.operating_hours,
        pricing=s.pricing,
        is_active=s.is_active,
        available_slots=view.available_slots,
        total_slots=view.total_slots,
        distance_km=round(view.distance_km, 3) if view.distance_km is not None else None,
        distance=view.distance,
    )


def station_detail(station: Station, origin: tuple[float, float] | None = None) -> StationDetail:
    view = StationView.from_station(station, origin)
    return StationDetail(
        **_summary(view).model_dump(),
        zip_code=station.zip_code,
        phone=station.phone,
        owner_name=station.owner_name,
        owner_email=station.owner_email,
        owner_phone=station.owner_phone,
        registration_id=station.registration_id,
        slots=[SlotResponse.model_validate(slot) for slot in station.slots],
    )


def _origin(lat: float | None, lng: float | None) -> tuple[float, float] | None:
    if (lat is None) != (lng is None):
        raise ValidationError("lat and lng must be given together")
    if lat is None:
        return None
    return (lat, lng)


@router.get("", response_model=StationListResponse)
def list_stations(
    search: str | None = None,
    location: str | None = None,
    charger_type: str | None = None,
    available_now: bool = False,
    min_available: int | None = Query(default=None, ge=0),
    fast_charging: bool = False,
    twenty_four_seven: bool = False,
    sort: str = "distance",
    lat: float | None = Query(default=None, ge=-90, le=90),
    lng: float | None = Query(default=None, ge=-180, le=180),
    geo_error: str | None = None,
    include_inactive: bool = False,
    actor: Actor | None = Depends(get_optional_actor),
    db: Session = Depends(get_db),
) -> StationListResponse:
    """Discover stations. All given filters must match; sort by distance, availability, name or city.

    lat/lng is the caller's position when the client could get one; otherwise geo_error
    carries the client's geolocation failure code and the map falls back to the default view.
    """
    origin = _origin(lat, lng)
    active_only = not (include_inactive and actor is not None and actor.is_admin)
    stations = repo_list_stations(db, active_only=active_only)
    views = [StationView.from_station(s, origin) for s in stations]
    station_filter = StationFilter(
        search=search,
        location=location,
        charger_type=charger_type,
        available_now=available_now,
        min_available=min_available,
        fast_charging=fast_charging,
        twenty_four_seven=twenty_four_seven,
    )
    result = sort_stations(apply_filters(views, station_filter), sort)
    map_view = resolve_map_view(origin, location, geo_error)
    return StationListResponse(
        stations=[_summary(v) for v in result],
        count=len(result),
        sort=sort,
        map=MapViewResponse(center=map_view.center, zoom=map_view.zoom, message=map_view.message),
        locations=location_options(stations),
    )


@router.get("/{station_id}", response_model=StationDetail)
def get_station_detail(
    station_id: str,
    lat: float | None = Query(default=None, ge=-90, le=90),
    lng: float | None = Query(default=None, ge=-180, le=180),
    actor: Actor | None = Depends(get_optional_actor),
    db: Session = Depends(get_db),
) -> StationDetail:
    station = get_station(db, station_id)
    if station is None or (not station.is_active and not (actor is not None and actor.is_admin)):
        raise NotFoundError("Station not found")
    return station_detail(station, _origin(lat, lng))


@router.post("", response_model=StationDetail, status_code=status.HTTP_201_CREATED)
def create_station(
    body: StationCreate,
    actor: Actor = Depends(get_admin_actor),
    db: Session = Depends(get_db),
) -> StationDetail:
    """Create a station directly (admin). Its slots start available and standard."""
    fields = body.model_dump(exclude={"total_slots"})
    station = repo_create_station(db, total_slots=body.total_slots, **fields)
    LOG.info("BUNK_CREATED station=%s name=%s slots=%d by=%s", station.id, station.name, body.total_slots, actor.user_id)
    return station_detail(station)


@router.patch("/{station_id}", response_model=StationDetail)
def update_station(
    station_id: str,
    body: StationUpdate,
    actor: Actor = Depends(get_admin_actor),
    db: Session = Depends(get_db),
) -> StationDetail:
    updates = {
        k: v
        for k, v in body.model_dump(exclude_unset=True).items()
        if v is not None or k not in REQUIRED_STATION_FIELDS
    }
    current = get_station(db, station_id)
    if current is None:
        raise NotFoundError("Station not found")
    lat = updates.get("latitude", current.latitude)
    lng = updates.get("longitude", current.longitude)
    if (lat is None) != (lng is None):
        raise ValidationError("latitude and longitude must be given together")
    station = repo_update_station(db, station_id, updates)
    LOG.info("BUNK_UPDATED station=%s fields=%s by=%s", station_id, sorted(updates), actor.user_id)
    return station_detail(station)


@router.delete("/{station_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_station(
    station_id: str,
    actor: Actor = Depends(get_admin_actor),
    db: Session = Depends(get_db),
) -> None:
    """Delete a station and its slots. Active bookings on it are cancelled; history is kept."""
    if not repo_delete_station(db, station_id):
        raise NotFoundError("Station not found")
    LOG.info("BUNK_DELETED station=%s by=%s", station_id, actor.user_id)


@router.put("/{station_id}/slots/{slot_number}", response_model=SlotResponse)
def put_slot_status(
    station_id: str,
    slot_number: int,
    body: SlotStatusUpdate,
    actor: Actor = Depends(get_admin_actor),
    db: Session = Depends(get_db),
) -> SlotResponse:
    """Set a slot available or occupied. expected_status makes the toggle conditional."""
    slot = set_slot_status(
        db,
        station_id,
        slot_number,
        SlotStatus(body.status),
        actor,
        expected_status=SlotStatus(body.expected_status) if body.expected_status else None,
    )
    return SlotResponse.model_validate(slot)


@router.post("/{station_id}/bookings", response_model=BookingCreated, status_code=status.HTTP_201_CREATED)
def create_booking(
    station_id: str,
    body: BookingCreate,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
) -> BookingCreated:
    """Book one slot. 409 when the slot is already taken."""
    result = book_slot(
        db,
        station_id=station_id,
        slot_number=body.slot_number,
        booking_time=body.booking_time,
        actor=actor,
    )
    return BookingCreated(
        booking_id=result.booking_id,
        slot_number=result.slot_number,
        slot_status=result.slot_status.value,
        booking=BookingResponse.model_validate(result.booking),
    )
