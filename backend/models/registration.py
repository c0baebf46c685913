"""Registration request model: a prospective owner's station submission awaiting review."""
import uuid
from datetime import datetime

from sqlalchemy import DateTime, Float, Integer, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import JSON

from models import Base
from models.enums import RegistrationStatus
from utils.timeutils import utcnow


class Registration(Base):
    """registration table: proposed station fields, owner contact, requested slots and review metadata."""

    __tablename__ = "registration"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    address: Mapped[str] = mapped_column(String(512), nullable=False)
    city: Mapped[str] = mapped_column(String(128), nullable=False)
    state: Mapped[str] = mapped_column(String(128), nullable=False)
    zip_code: Mapped[str] = mapped_column(String(32), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(64), nullable=True)
    latitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    longitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    owner_name: Mapped[str] = mapped_column(String(255), nullable=False)
    owner_email: Mapped[str] = mapped_column(String(320), nullable=False)
    owner_phone: Mapped[str] = mapped_column(String(64), nullable=False)
    total_slots: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    # "standard", "fast" or "both" (alternating).
    slot_types: Mapped[str] = mapped_column(String(16), nullable=False, default="standard")
    amenities: Mapped[list | None] = mapped_column(JSON(), nullable=True)
    connector_types: Mapped[list | None] = mapped_column(JSON(), nullable=True)
    operating_hours: Mapped[str] = mapped_column(String(128), nullable=False, default="24/7")
    pricing: Mapped[str | None] = mapped_column(String(128), nullable=True)

    status: Mapped[str] = mapped_column(
        String(16), nullable=False, default=RegistrationStatus.pending.value, index=True
    )
    submitted_by: Mapped[str] = mapped_column(String(36), nullable=False, default="anonymous")
    submitted_email: Mapped[str] = mapped_column(String(320), nullable=False)
    submitted_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    reviewed_by: Mapped[str | None] = mapped_column(String(36), nullable=True)
    reviewed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    rejection_reason: Mapped[str | None] = mapped_column(String(512), nullable=True)
    station_id: Mapped[str | None] = mapped_column(String(36), nullable=True)
