"""Pydantic schemas for station discovery and station management."""
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator


class SlotResponse(BaseModel):
    """Slot in station detail."""

    model_config = ConfigDict(from_attributes=True)

    number: int
    status: str
    slot_type: str
    version: int = 0


class StationBase(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    address: str = Field(min_length=1, max_length=512)
    city: str = ""
    state: str = ""
    zip_code: str = ""
    phone: str | None = None
    latitude: float | None = Field(default=None, ge=-90, le=90)
    longitude: float | None = Field(default=None, ge=-180, le=180)
    amenities: list[str] = Field(default_factory=list)
    connector_types: list[str] = Field(default_factory=list)
    operating_hours: str = "24/7"
    pricing: str | None = None
    owner_name: str | None = None
    owner_email: str | None = None
    owner_phone: str | None = None

    @model_validator(mode="after")
    def _coordinates_together(self):
        if (self.latitude is None) != (self.longitude is None):
            raise ValueError("latitude and longitude must be given together")
        return self


class StationCreate(StationBase):
    """Payload for POST /stations. Slots are created available and standard."""

    total_slots: int = Field(ge=1, le=100)


class StationUpdate(BaseModel):
    """Payload for PATCH /stations/{id} (all fields optional). Slot count is not editable."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    phone: str | None = None
    latitude: float | None = Field(default=None, ge=-90, le=90)
    longitude: float | None = Field(default=None, ge=-180, le=180)
    amenities: list[str] | None = None
    connector_types: list[str] | None = None
    operating_hours: str | None = None
    pricing: str | None = None
    owner_name: str | None = None
    owner_email: str | None = None
    owner_phone: str | None = None
    is_active: bool | None = None


class StationSummary(BaseModel):
    """Station in discovery listings."""

    id: str
    name: str
    address: str
    city: str
    state: str
    latitude: float | None = None
    longitude: float | None = None
    amenities: list[str] = Field(default_factory=list)
    connector_types: list[str] = Field(default_factory=list)
    operating_hours: str
    pricing: str | None = None
    is_active: bool = True
    available_slots: int
    total_slots: int
    distance_km: float | None = None
    distance: str | None = None


class StationDetail(StationSummary):
    """Station detail with its slots."""

    zip_code: str = ""
    phone: str | None = None
    owner_name: str | None = None
    owner_email: str | None = None
    owner_phone: str | None = None
    registration_id: str | None = None
    slots: list[SlotResponse] = Field(default_factory=list)


class MapViewResponse(BaseModel):
    center: tuple[float, float]
    zoom: int
    message: str | None = None


class StationListResponse(BaseModel):
    """Response for GET /stations: filtered, sorted stations plus map view and location choices."""

    stations: list[StationSummary]
    count: int
    sort: str
    map: MapViewResponse
    locations: list[str]


class SlotStatusUpdate(BaseModel):
    """Payload for PUT /stations/{id}/slots/{number}."""

    status: Literal["available", "occupied"]
    expected_status: Literal["available", "occupied"] | None = None
