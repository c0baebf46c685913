"""API tests: public registration form and admin review."""
import pytest

pytestmark = pytest.mark.api


def _form(**overrides):
    body = {
        "name": "Green Volt Station",
        "address": "MG Road",
        "city": "Pune",
        "state": "Maharashtra",
        "zip_code": "411001",
        "latitude": 18.5204,
        "longitude": 73.8567,
        "owner_name": "Meera Joshi",
        "owner_email": "meera@greenvolt.in",
        "owner_phone": "9822001122",
        "total_slots": 4,
        "slot_types": "both",
        "connector_types": ["CCS", "Type 2"],
        "amenities": ["Parking"],
    }
    body.update(overrides)
    return body


def test_anonymous_submission(client):
    r = client.post("/api/registrations", json=_form())
    assert r.status_code == 201
    data = r.json()
    assert data["status"] == "pending"
    assert data["submitted_by"] == "anonymous"
    assert data["submitted_email"] == "meera@greenvolt.in"
    assert data["station_id"] is None


def test_signed_in_submission_records_submitter(client, user, user_headers):
    r = client.post("/api/registrations", json=_form(), headers=user_headers)
    assert r.status_code == 201
    assert r.json()["submitted_by"] == user.id
    assert r.json()["submitted_email"] == "asha@chargehub.in"


def test_submission_validation(client):
    assert client.post("/api/registrations", json=_form(longitude=None)).status_code == 422
    assert client.post("/api/registrations", json=_form(total_slots=0)).status_code == 422
    assert client.post("/api/registrations", json=_form(slot_types="turbo")).status_code == 422
    assert client.post("/api/registrations", json=_form(owner_email="meera")).status_code == 422


def test_listing_is_admin_only(client, user_headers, admin_headers):
    client.post("/api/registrations", json=_form())
    assert client.get("/api/registrations", headers=user_headers).status_code == 403
    pending = client.get("/api/registrations", headers=admin_headers).json()
    assert [r["name"] for r in pending] == ["Green Volt Station"]
    approved = client.get("/api/registrations", params={"status": "approved"}, headers=admin_headers).json()
    assert approved == []


def test_approve_creates_station(client, admin, admin_headers, user_headers):
    reg_id = client.post("/api/registrations", json=_form()).json()["id"]
    assert client.post(f"/api/registrations/{reg_id}/approve", headers=user_headers).status_code == 403

    r = client.post(f"/api/registrations/{reg_id}/approve", headers=admin_headers)
    assert r.status_code == 200
    station = r.json()
    assert station["name"] == "Green Volt Station"
    assert station["registration_id"] == reg_id
    assert station["available_slots"] == station["total_slots"] == 4
    assert [s["slot_type"] for s in station["slots"]] == ["standard", "fast", "standard", "fast"]

    assert client.get(f"/api/stations/{station['id']}").status_code == 200
    reviewed = client.get("/api/registrations", params={"status": "approved"}, headers=admin_headers).json()
    assert reviewed[0]["station_id"] == station["id"]
    assert reviewed[0]["reviewed_by"] == admin.id


def test_second_decision_is_conflict(client, admin_headers):
    reg_id = client.post("/api/registrations", json=_form()).json()["id"]
    assert client.post(f"/api/registrations/{reg_id}/approve", headers=admin_headers).status_code == 200
    again = client.post(f"/api/registrations/{reg_id}/approve", headers=admin_headers)
    assert again.status_code == 409
    assert again.json()["code"] == "conflict"
    assert client.post(f"/api/registrations/{reg_id}/reject", headers=admin_headers).status_code == 409


def test_reject_with_and_without_reason(client, admin_headers):
    first = client.post("/api/registrations", json=_form()).json()["id"]
    second = client.post("/api/registrations", json=_form(name="Volt Two")).json()["id"]

    r = client.post(f"/api/registrations/{first}/reject", headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["status"] == "rejected"
    assert r.json()["rejection_reason"] == "Manual rejection by admin"

    r = client.post(f"/api/registrations/{second}/reject", json={"reason": "Duplicate listing"}, headers=admin_headers)
    assert r.json()["rejection_reason"] == "Duplicate listing"
    assert client.get("/api/registrations", headers=admin_headers).json() == []


def test_decide_unknown_registration_is_404(client, admin_headers):
    assert client.post("/api/registrations/missing/approve", headers=admin_headers).status_code == 404
