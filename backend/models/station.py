"""Station (charging "bunk") model for DB persistence."""
import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, Float, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.types import JSON

from models import Base
from utils.timeutils import utcnow


class Station(Base):
    """Station table: address, coordinates, metadata and owner contact. Slots in slot table."""

    __tablename__ = "station"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    address: Mapped[str] = mapped_column(String(512), nullable=False)
    city: Mapped[str] = mapped_column(String(128), nullable=False, default="")
    state: Mapped[str] = mapped_column(String(128), nullable=False, default="")
    zip_code: Mapped[str] = mapped_column(String(32), nullable=False, default="")
    phone: Mapped[str | None] = mapped_column(String(64), nullable=True)
    latitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    longitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    amenities: Mapped[list | None] = mapped_column(JSON(), nullable=True)
    # Connector standards offered ("CCS", "Type 2", "CHAdeMO", ...); used by discovery filters.
    connector_types: Mapped[list | None] = mapped_column(JSON(), nullable=True)
    operating_hours: Mapped[str] = mapped_column(String(128), nullable=False, default="24/7")
    pricing: Mapped[str | None] = mapped_column(String(128), nullable=True)
    owner_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    owner_email: Mapped[str | None] = mapped_column(String(320), nullable=True)
    owner_phone: Mapped[str | None] = mapped_column(String(64), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    # Registration request this station was materialized from (None for admin-created stations).
    registration_id: Mapped[str | None] = mapped_column(String(36), nullable=True)

    slots: Mapped[list["Slot"]] = relationship(
        "Slot",
        back_populates="station",
        cascade="all, delete-orphan",
        order_by="Slot.number",
    )
