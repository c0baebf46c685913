"""Integration tests: booking coordinator against the test DB."""
from datetime import timedelta

import pytest
from sqlalchemy import update
from sqlalchemy.exc import OperationalError

from booking_core.coordinator import book_slot, cancel_booking, complete_booking, set_slot_status
from booking_core.errors import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    TransientServiceError,
    ValidationError,
)
from booking_core.transaction import transact
from models.booking import Booking
from models.enums import BookingStatus, SlotStatus
from models.slot import Slot
from repositories.booking_repository import get_active_booking_for_slot, list_bookings
from repositories.station_repository import get_slot, update_station
from utils.timeutils import utcnow

pytestmark = pytest.mark.integration


def _book(db_session, station, actor, when, number=1):
    return book_slot(db_session, station_id=station.id, slot_number=number, booking_time=when, actor=actor)


def test_book_slot_occupies_slot_and_records_booking(db_session, station, actor, future_time):
    result = _book(db_session, station, actor, future_time, number=2)
    assert result.slot_number == 2
    assert result.slot_status is SlotStatus.occupied
    booking = result.booking
    assert booking.status == BookingStatus.active.value
    assert booking.user_id == actor.user_id
    assert booking.user_email == "asha@chargehub.in"
    assert booking.station_name == "Delhi EV Charging Hub"
    slot = get_slot(db_session, station.id, 2)
    assert slot.status == SlotStatus.occupied.value
    assert slot.version == 1


def test_booking_in_the_past_is_rejected_without_side_effects(db_session, station, actor):
    with pytest.raises(ValidationError):
        _book(db_session, station, actor, utcnow() - timedelta(minutes=1))
    assert get_slot(db_session, station.id, 1).status == SlotStatus.available.value
    assert list_bookings(db_session) == []


def test_booking_time_equal_to_now_is_rejected(db_session, station, actor):
    now = utcnow()
    with pytest.raises(ValidationError):
        book_slot(db_session, station_id=station.id, slot_number=1, booking_time=now, actor=actor, now=now)


def test_naive_booking_time_is_treated_as_utc(db_session, station, actor):
    naive = (utcnow() + timedelta(hours=2)).replace(tzinfo=None)
    assert _book(db_session, station, actor, naive).booking.id


def test_unknown_station_or_slot_is_not_found(db_session, station, actor, future_time):
    with pytest.raises(NotFoundError):
        book_slot(db_session, station_id="missing", slot_number=1, booking_time=future_time, actor=actor)
    with pytest.raises(NotFoundError):
        _book(db_session, station, actor, future_time, number=99)


def test_inactive_station_cannot_be_booked(db_session, station, actor, future_time):
    update_station(db_session, station.id, {"is_active": False})
    with pytest.raises(NotFoundError):
        _book(db_session, station, actor, future_time)


def test_second_booking_of_same_slot_conflicts(db_session, station, actor, other_actor, future_time):
    _book(db_session, station, actor, future_time)
    with pytest.raises(ConflictError):
        _book(db_session, station, other_actor, future_time)
    assert len(list_bookings(db_session, status=BookingStatus.active.value)) == 1


def test_cancel_frees_slot_and_second_cancel_conflicts(db_session, station, actor, future_time):
    booking = _book(db_session, station, actor, future_time).booking
    cancelled = cancel_booking(db_session, booking.id, actor)
    assert cancelled.status == BookingStatus.cancelled.value
    assert get_slot(db_session, station.id, 1).status == SlotStatus.available.value
    with pytest.raises(ConflictError):
        cancel_booking(db_session, booking.id, actor)
    # Slot can be booked again.
    assert _book(db_session, station, actor, future_time).booking.id != booking.id


def test_only_owner_or_admin_can_cancel(db_session, station, actor, other_actor, admin_actor, future_time):
    booking = _book(db_session, station, actor, future_time).booking
    with pytest.raises(AuthorizationError):
        cancel_booking(db_session, booking.id, other_actor)
    assert cancel_booking(db_session, booking.id, admin_actor).status == BookingStatus.cancelled.value


def test_cancel_unknown_booking_is_not_found(db_session, actor):
    with pytest.raises(NotFoundError):
        cancel_booking(db_session, "missing", actor)


def test_complete_is_admin_only(db_session, station, actor, admin_actor, future_time):
    booking = _book(db_session, station, actor, future_time).booking
    with pytest.raises(AuthorizationError):
        complete_booking(db_session, booking.id, actor)
    done = complete_booking(db_session, booking.id, admin_actor)
    assert done.status == BookingStatus.completed.value
    assert get_slot(db_session, station.id, 1).status == SlotStatus.available.value


def test_admin_release_completes_active_booking(db_session, station, actor, admin_actor, future_time):
    booking = _book(db_session, station, actor, future_time).booking
    slot = set_slot_status(db_session, station.id, 1, SlotStatus.available, admin_actor)
    assert slot.status == SlotStatus.available.value
    db_session.refresh(booking)
    assert booking.status == BookingStatus.completed.value
    assert get_active_booking_for_slot(db_session, slot.id) is None


def test_admin_occupy_leaves_ledger_unchanged(db_session, station, admin_actor):
    slot = set_slot_status(db_session, station.id, 3, SlotStatus.occupied, admin_actor)
    assert slot.status == SlotStatus.occupied.value
    assert slot.version == 1
    assert list_bookings(db_session) == []


def test_slot_toggle_with_stale_expected_status_conflicts(db_session, station, admin_actor):
    set_slot_status(db_session, station.id, 1, SlotStatus.occupied, admin_actor)
    with pytest.raises(ConflictError):
        set_slot_status(
            db_session, station.id, 1, SlotStatus.occupied, admin_actor, expected_status=SlotStatus.available
        )


def test_users_cannot_toggle_slots(db_session, station, actor):
    with pytest.raises(AuthorizationError):
        set_slot_status(db_session, station.id, 1, SlotStatus.occupied, actor)


def test_transact_rolls_back_guard_when_writes_hit_unique_index(db_session, station, actor, future_time):
    """A second active booking for a slot is refused by the partial unique index."""
    first = _book(db_session, station, actor, future_time)
    slot = get_slot(db_session, station.id, 2)
    guard = update(Slot).where(Slot.id == slot.id).values(version=Slot.version + 1)

    def duplicate(s):
        s.add(
            Booking(
                user_id=actor.user_id,
                user_email=actor.email,
                station_id=station.id,
                station_name=station.name,
                slot_id=first.booking.slot_id,
                slot_number=1,
                booking_time=future_time,
                status=BookingStatus.active.value,
            )
        )
        s.flush()

    with pytest.raises(ConflictError):
        transact(db_session, guard, duplicate, conflict_message="taken")
    assert get_slot(db_session, station.id, 2).version == 0


def test_transact_maps_operational_error_to_transient(db_session, station):
    slot = get_slot(db_session, station.id, 1)
    guard = (
        update(Slot)
        .where(Slot.id == slot.id, Slot.status == SlotStatus.available.value)
        .values(status=SlotStatus.occupied.value)
    )

    def storage_down(s):
        raise OperationalError("INSERT INTO booking", {}, Exception("database is locked"))

    with pytest.raises(TransientServiceError):
        transact(db_session, guard, storage_down, conflict_message="taken")
    assert get_slot(db_session, station.id, 1).status == SlotStatus.available.value
