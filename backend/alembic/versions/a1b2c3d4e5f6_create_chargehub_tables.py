"""create_chargehub_tables

Revision ID: a1b2c3d4e5f6
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "a1b2c3d4e5f6"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create app_user, station, slot, booking and registration tables."""
    op.create_table(
        "app_user",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("phone", sa.String(length=64), nullable=True),
        sa.Column("role", sa.String(length=16), nullable=False),
        sa.Column("vehicle_type", sa.String(length=128), nullable=True),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("session_version", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_app_user_email", "app_user", ["email"], unique=True)

    op.create_table(
        "station",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("address", sa.String(length=512), nullable=False),
        sa.Column("city", sa.String(length=128), nullable=False),
        sa.Column("state", sa.String(length=128), nullable=False),
        sa.Column("zip_code", sa.String(length=32), nullable=False),
        sa.Column("phone", sa.String(length=64), nullable=True),
        sa.Column("latitude", sa.Float(), nullable=True),
        sa.Column("longitude", sa.Float(), nullable=True),
        sa.Column("amenities", sa.JSON(), nullable=True),
        sa.Column("connector_types", sa.JSON(), nullable=True),
        sa.Column("operating_hours", sa.String(length=128), nullable=False, server_default="24/7"),
        sa.Column("pricing", sa.String(length=128), nullable=True),
        sa.Column("owner_name", sa.String(length=255), nullable=True),
        sa.Column("owner_email", sa.String(length=320), nullable=True),
        sa.Column("owner_phone", sa.String(length=64), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("registration_id", sa.String(length=36), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "slot",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("station_id", sa.String(length=36), nullable=False),
        sa.Column("number", sa.Integer(), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False, server_default="available"),
        sa.Column("slot_type", sa.String(length=16), nullable=False, server_default="standard"),
        sa.Column("version", sa.Integer(), nullable=False, server_default="0"),
        sa.ForeignKeyConstraint(["station_id"], ["station.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("station_id", "number", name="uq_slot_station_id_number"),
    )

    op.create_table(
        "booking",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("user_id", sa.String(length=36), nullable=True),
        sa.Column("user_email", sa.String(length=320), nullable=False),
        sa.Column("station_id", sa.String(length=36), nullable=True),
        sa.Column("station_name", sa.String(length=255), nullable=False),
        sa.Column("slot_id", sa.String(length=36), nullable=True),
        sa.Column("slot_number", sa.Integer(), nullable=False),
        sa.Column("booking_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["user_id"], ["app_user.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["station_id"], ["station.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["slot_id"], ["slot.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    # At most one active booking per slot.
    op.create_index(
        "uq_booking_active_slot",
        "booking",
        ["slot_id"],
        unique=True,
        sqlite_where=sa.text("status = 'active'"),
        postgresql_where=sa.text("status = 'active'"),
    )
    op.create_index("ix_booking_user_id_booking_time", "booking", ["user_id", "booking_time"])

    op.create_table(
        "registration",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("address", sa.String(length=512), nullable=False),
        sa.Column("city", sa.String(length=128), nullable=False),
        sa.Column("state", sa.String(length=128), nullable=False),
        sa.Column("zip_code", sa.String(length=32), nullable=False),
        sa.Column("phone", sa.String(length=64), nullable=True),
        sa.Column("latitude", sa.Float(), nullable=True),
        sa.Column("longitude", sa.Float(), nullable=True),
        sa.Column("owner_name", sa.String(length=255), nullable=False),
        sa.Column("owner_email", sa.String(length=320), nullable=False),
        sa.Column("owner_phone", sa.String(length=64), nullable=False),
        sa.Column("total_slots", sa.Integer(), nullable=False),
        sa.Column("slot_types", sa.String(length=16), nullable=False, server_default="standard"),
        sa.Column("amenities", sa.JSON(), nullable=True),
        sa.Column("connector_types", sa.JSON(), nullable=True),
        sa.Column("operating_hours", sa.String(length=128), nullable=False, server_default="24/7"),
        sa.Column("pricing", sa.String(length=128), nullable=True),
        sa.Column("status", sa.String(length=16), nullable=False, server_default="pending"),
        sa.Column("submitted_by", sa.String(length=36), nullable=False, server_default="anonymous"),
        sa.Column("submitted_email", sa.String(length=320), nullable=False),
        sa.Column("submitted_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("reviewed_by", sa.String(length=36), nullable=True),
        sa.Column("reviewed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("rejection_reason", sa.String(length=512), nullable=True),
        sa.Column("station_id", sa.String(length=36), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_registration_status", "registration", ["status"])


def downgrade() -> None:
    """Drop all tables."""
    op.drop_index("ix_registration_status", table_name="registration", if_exists=True)
    op.drop_table("registration", if_exists=True)
    op.drop_index("ix_booking_user_id_booking_time", table_name="booking", if_exists=True)
    op.drop_index("uq_booking_active_slot", table_name="booking", if_exists=True)
    op.drop_table("booking", if_exists=True)
    op.drop_table("slot", if_exists=True)
    op.drop_table("station", if_exists=True)
    op.drop_index("ix_app_user_email", table_name="app_user", if_exists=True)
    op.drop_table("app_user", if_exists=True)
