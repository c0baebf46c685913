"""Slot model: one bookable charging point of a station."""
import uuid

from sqlalchemy import ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models import Base
from models.enums import SlotStatus, SlotType


class Slot(Base):
    """slot table: id, station_id, number (1-based, stable), status, slot_type, version."""

    __tablename__ = "slot"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
    station_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("station.id", ondelete="CASCADE"),
        nullable=False,
    )
    number: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[str] = mapped_column(String(16), nullable=False, default=SlotStatus.available.value)
    slot_type: Mapped[str] = mapped_column(String(16), nullable=False, default=SlotType.standard.value)
    # Incremented by every conditional status write.
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    station: Mapped["Station"] = relationship("Station", back_populates="slots")

    __table_args__ = (UniqueConstraint("station_id", "number", name="uq_slot_station_id_number"),)
