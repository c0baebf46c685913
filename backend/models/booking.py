"""Booking model: the append-only ledger of slot reservations."""
import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column

from models import Base
from models.enums import BookingStatus
from utils.timeutils import utcnow


class Booking(Base):
    """booking table. station_name / user_email are snapshots taken at booking time."""

    __tablename__ = "booking"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
    user_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("app_user.id", ondelete="SET NULL"),
        nullable=True,
    )
    user_email: Mapped[str] = mapped_column(String(320), nullable=False)
    station_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("station.id", ondelete="SET NULL"),
        nullable=True,
    )
    station_name: Mapped[str] = mapped_column(String(255), nullable=False)
    slot_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("slot.id", ondelete="SET NULL"),
        nullable=True,
    )
    slot_number: Mapped[int] = mapped_column(Integer, nullable=False)
    booking_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    status: Mapped[str] = mapped_column(String(16), nullable=False, default=BookingStatus.active.value)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    # At most one active booking per slot, enforced by the database.
    __table_args__ = (
        Index(
            "uq_booking_active_slot",
            "slot_id",
            unique=True,
            sqlite_where=text("status = 'active'"),
            postgresql_where=text("status = 'active'"),
        ),
        Index("ix_booking_user_id_booking_time", "user_id", "booking_time"),
    )
