# Set test environment before any application or db imports.
import os

os.environ["TESTING"] = "true"
os.environ["TESTING_DATABASE_URL"] = "sqlite:///:memory:"

from datetime import timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from auth.security import hash_password, make_access_token
from booking_core.actors import Actor
from db import SessionLocal, get_db
from main import app
from models import Base
from models.enums import Role
from repositories.station_repository import create_station
from repositories.user_repository import create_user
from utils.timeutils import utcnow

USER_PASSWORD = "secret123"
ADMIN_PASSWORD = "adminpass"


def _get_engine():
    """Engine used by the app (in-memory when TESTING=true)."""
    return SessionLocal.kw["bind"]


@pytest.fixture(scope="session")
def engine():
    """One in-memory engine per test run; create tables once."""
    eng = _get_engine()
    Base.metadata.create_all(eng)
    return eng


@pytest.fixture
def db_session(engine):
    """Function-scoped session inside an outer transaction that is rolled back.

    Commits inside the code under test only release SAVEPOINTs, so each test starts clean.
    """
    connection = engine.connect()
    trans = connection.begin()
    session = Session(bind=connection, join_transaction_mode="create_savepoint")
    try:
        yield session
    finally:
        session.close()
        if trans.is_active:
            trans.rollback()
        connection.close()


def _override_get_db(session):
    """Return a generator that yields the given session (for dependency override)."""
    def override():
        yield session
    return override


@pytest.fixture
def client(db_session):
    """API test client; overrides get_db to use the test db_session, cleared on teardown."""
    app.dependency_overrides[get_db] = _override_get_db(db_session)
    try:
        with TestClient(app) as c:
            yield c
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def user(db_session):
    return create_user(
        db_session,
        name="Asha Rao",
        email="asha@chargehub.in",
        password_hash=hash_password(USER_PASSWORD),
        phone="9876543210",
    )


@pytest.fixture
def other_user(db_session):
    return create_user(
        db_session,
        name="Vikram Iyer",
        email="vikram@chargehub.in",
        password_hash=hash_password(USER_PASSWORD),
    )


@pytest.fixture
def admin(db_session):
    return create_user(
        db_session,
        name="Station Admin",
        email="admin@admin.chargehub.in",
        password_hash=hash_password(ADMIN_PASSWORD),
        role=Role.admin,
    )


@pytest.fixture
def actor(user):
    return Actor.from_user(user)


@pytest.fixture
def other_actor(other_user):
    return Actor.from_user(other_user)


@pytest.fixture
def admin_actor(admin):
    return Actor.from_user(admin)


def _bearer(u) -> dict:
    return {"Authorization": f"Bearer {make_access_token(u.id, u.session_version)}"}


@pytest.fixture
def user_headers(user):
    return _bearer(user)


@pytest.fixture
def other_headers(other_user):
    return _bearer(other_user)


@pytest.fixture
def admin_headers(admin):
    return _bearer(admin)


@pytest.fixture
def station(db_session):
    """Active station with four available standard slots."""
    return create_station(
        db_session,
        total_slots=4,
        name="Delhi EV Charging Hub",
        address="Connaught Place, New Delhi",
        city="New Delhi",
        state="Delhi",
        zip_code="110001",
        latitude=28.6315,
        longitude=77.2167,
        amenities=["Cafe", "Wi-Fi"],
        connector_types=["CCS", "Type 2"],
        operating_hours="24/7",
        pricing="₹5.00/kWh",
    )


@pytest.fixture
def future_time():
    return utcnow() + timedelta(days=1)
