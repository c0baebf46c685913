"""API tests: admin and user dashboards."""
from datetime import timedelta

import pytest

from utils.timeutils import utcnow

pytestmark = pytest.mark.api


def _book(client, station, headers, slot_number):
    r = client.post(
        f"/api/stations/{station.id}/bookings",
        json={"slot_number": slot_number, "booking_time": (utcnow() + timedelta(hours=slot_number)).isoformat()},
        headers=headers,
    )
    assert r.status_code == 201
    return r.json()["booking_id"]


def test_admin_dashboard_counts(client, station, user, other_user, user_headers, other_headers, admin_headers):
    _book(client, station, user_headers, 1)
    cancelled = _book(client, station, other_headers, 2)
    client.post(f"/api/bookings/{cancelled}/cancel", headers=other_headers)
    client.post(
        "/api/registrations",
        json={
            "name": "Pending Bunk",
            "address": "Ring Road",
            "city": "Surat",
            "state": "Gujarat",
            "zip_code": "395001",
            "owner_name": "Ravi Patel",
            "owner_email": "ravi@bunks.in",
            "owner_phone": "9000000001",
            "total_slots": 2,
        },
    )

    r = client.get("/api/admin/dashboard", headers=admin_headers)
    assert r.status_code == 200
    data = r.json()
    assert data["total_stations"] == 1
    assert data["total_slots"] == 4
    assert data["occupied_slots"] == 1
    assert data["available_slots"] == 3
    assert data["total_users"] == 2
    assert data["pending_registrations"] == 1
    assert data["active_bookings"] == 1
    assert len(data["recent_bookings"]) == 2


def test_admin_dashboard_forbidden_for_users(client, user_headers):
    assert client.get("/api/admin/dashboard", headers=user_headers).status_code == 403


def test_user_dashboard(client, station, user_headers, other_headers):
    _book(client, station, user_headers, 1)
    done = _book(client, station, user_headers, 2)
    _book(client, station, other_headers, 3)
    client.post(f"/api/bookings/{done}/cancel", headers=user_headers)

    r = client.get("/api/dashboard", headers=user_headers)
    assert r.status_code == 200
    data = r.json()
    assert data["profile"]["email"] == "asha@chargehub.in"
    assert data["active_bookings"] == 1
    assert [b["slot_number"] for b in data["recent_bookings"]] == [2, 1]


def test_user_dashboard_requires_sign_in(client):
    assert client.get("/api/dashboard").status_code == 401
