"""Integration tests: two independent sessions racing for one slot on a file database.

Each session reads the slot while it is still available, then both try to book it, either
in turn or on two threads released together. Exactly one booking commits; the other caller
gets a ConflictError.
"""
import threading
from datetime import timedelta

import pytest
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from auth.security import hash_password
from booking_core.actors import Actor
from booking_core.approval import approve_registration, submit_registration
from booking_core.coordinator import book_slot
from booking_core.errors import ConflictError
from db import build_engine
from models import Base
from models.booking import Booking
from models.enums import BookingStatus, Role, SlotStatus
from models.station import Station
from repositories.station_repository import create_station, get_slot
from repositories.user_repository import create_user
from utils.timeutils import utcnow

pytestmark = pytest.mark.integration


@pytest.fixture
def file_engine(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'test_race.db'}")
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def seeded(file_engine):
    """Two users, an admin and a station with two slots, committed to the file DB."""
    with Session(file_engine) as s:
        users = [
            create_user(s, name=f"Driver {i}", email=f"driver{i}@chargehub.in", password_hash=hash_password("pw1234"))
            for i in (1, 2)
        ]
        admin = create_user(
            s, name="Admin", email="ops@admin.chargehub.in", password_hash=hash_password("pw1234"), role=Role.admin
        )
        station = create_station(s, total_slots=2, name="Race Station", address="1 Track Rd", city="Pune")
        return {
            "actors": [Actor.from_user(u) for u in users],
            "admin": Actor.from_user(admin),
            "station_id": station.id,
        }


def _observe_slot(session, station_id, number):
    """Load the slot and end the read transaction, keeping the loaded state in the identity map."""
    slot = get_slot(session, station_id, number)
    assert slot.status == SlotStatus.available.value
    session.commit()
    return slot


def test_two_bookings_on_one_slot_exactly_one_wins(file_engine, seeded):
    when = utcnow() + timedelta(hours=3)
    station_id = seeded["station_id"]
    first_actor, second_actor = seeded["actors"]
    a = Session(file_engine, expire_on_commit=False)
    b = Session(file_engine, expire_on_commit=False)
    try:
        _observe_slot(a, station_id, 1)
        _observe_slot(b, station_id, 1)

        winner = book_slot(b, station_id=station_id, slot_number=1, booking_time=when, actor=second_actor)
        with pytest.raises(ConflictError):
            book_slot(a, station_id=station_id, slot_number=1, booking_time=when, actor=first_actor)
    finally:
        a.close()
        b.close()

    with Session(file_engine) as check:
        active = check.execute(
            select(Booking).where(Booking.status == BookingStatus.active.value)
        ).scalars().all()
        assert [bk.id for bk in active] == [winner.booking_id]
        assert active[0].user_id == second_actor.user_id
        slot = get_slot(check, station_id, 1)
        assert slot.status == SlotStatus.occupied.value
        assert slot.version == 1


def test_database_refuses_second_active_booking_for_slot(file_engine, seeded):
    with Session(file_engine) as s:
        slot = get_slot(s, seeded["station_id"], 2)
        actor = seeded["actors"][0]
        for _ in range(2):
            s.add(
                Booking(
                    user_id=actor.user_id,
                    user_email=actor.email,
                    station_id=seeded["station_id"],
                    station_name="Race Station",
                    slot_id=slot.id,
                    slot_number=2,
                    booking_time=utcnow() + timedelta(hours=1),
                    status=BookingStatus.active.value,
                )
            )
        with pytest.raises(IntegrityError):
            s.commit()


def test_concurrent_approvals_create_one_station(file_engine, seeded):
    with Session(file_engine) as s:
        registration = submit_registration(
            s,
            {
                "name": "Jaipur Plug Point",
                "address": "MI Road",
                "city": "Jaipur",
                "state": "Rajasthan",
                "zip_code": "302001",
                "owner_name": "Meera",
                "owner_email": "meera@plugpoint.in",
                "owner_phone": "9000000000",
                "total_slots": 2,
                "slot_types": "both",
            },
        )
        registration_id = registration.id

    a = Session(file_engine, expire_on_commit=False)
    b = Session(file_engine, expire_on_commit=False)
    try:
        # Both reviewers load the request while it is pending.
        a.get(type(registration), registration_id)
        a.commit()
        b.get(type(registration), registration_id)
        b.commit()
        approve_registration(b, registration_id, seeded["admin"])
        with pytest.raises(ConflictError):
            approve_registration(a, registration_id, seeded["admin"])
    finally:
        a.close()
        b.close()

    with Session(file_engine) as check:
        stations = check.execute(select(Station).where(Station.registration_id == registration_id)).scalars().all()
        assert len(stations) == 1


def _run_together(*calls):
    """Start each call on its own thread at the same moment; return the outcome names."""
    barrier = threading.Barrier(len(calls))
    outcomes = [None] * len(calls)

    def run(i, call):
        barrier.wait()
        try:
            call()
            outcomes[i] = "ok"
        except Exception as e:  # recorded and asserted on by the caller
            outcomes[i] = type(e).__name__

    threads = [threading.Thread(target=run, args=(i, call)) for i, call in enumerate(calls)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=30)
    return outcomes


def _in_own_session(engine, operation):
    def call():
        with Session(engine) as s:
            operation(s)
    return call


@pytest.mark.parametrize("attempt", range(5))
def test_simultaneous_bookings_one_wins_one_conflicts(file_engine, seeded, attempt):
    when = utcnow() + timedelta(hours=3)
    station_id = seeded["station_id"]
    calls = [
        _in_own_session(
            file_engine,
            lambda s, actor=actor: book_slot(s, station_id=station_id, slot_number=1, booking_time=when, actor=actor),
        )
        for actor in seeded["actors"]
    ]

    assert sorted(_run_together(*calls)) == ["ConflictError", "ok"]

    with Session(file_engine) as check:
        active = check.execute(
            select(Booking).where(Booking.status == BookingStatus.active.value)
        ).scalars().all()
        assert len(active) == 1
        assert get_slot(check, station_id, 1).version == 1


@pytest.mark.parametrize("attempt", range(5))
def test_simultaneous_approvals_one_wins_one_conflicts(file_engine, seeded, attempt):
    with Session(file_engine) as s:
        registration_id = submit_registration(
            s,
            {
                "name": "Nagpur Volt Stop",
                "address": "Wardha Road",
                "city": "Nagpur",
                "state": "Maharashtra",
                "zip_code": "440015",
                "owner_name": "Kiran",
                "owner_email": "kiran@voltstop.in",
                "owner_phone": "9000000002",
                "total_slots": 3,
                "slot_types": "fast",
            },
        ).id
    calls = [
        _in_own_session(file_engine, lambda s: approve_registration(s, registration_id, seeded["admin"]))
        for _ in range(2)
    ]

    assert sorted(_run_together(*calls)) == ["ConflictError", "ok"]

    with Session(file_engine) as check:
        stations = check.execute(select(Station).where(Station.registration_id == registration_id)).scalars().all()
        assert len(stations) == 1
        assert len(stations[0].slots) == 3
