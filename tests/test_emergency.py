from __future__ import annotations

import pytest

from app.core.errors import AuthenticationMissingError, LocationUnavailableError
from app.models.doctor import Doctor
from app.models.emergency import EmergencyStatus
from app.models.profile import Profile
from app.services import emergency, rpc


@pytest.fixture
def nearest_spy(monkeypatch):
    calls = []
    real = rpc.find_nearest_doctor

    async def _spy(db, lat, long, specialization_filter=None, limit=None):
        calls.append((lat, long, specialization_filter))
        return await real(db, lat, long, specialization_filter, limit)

    monkeypatch.setattr(rpc, "find_nearest_doctor", _spy)
    return calls


def test_gps_denied_and_empty_profile_address_skips_doctor_search(client, auth_headers, seed, nearest_spy):
    seed(Profile(id="p-sos", first_name="Kiran", address="", city=None, region=None))

    r = client.post("/emergency/nearby-doctors", json={}, headers=auth_headers("p-sos"))

    assert r.status_code == 200
    body = r.json()
    assert body["doctors"] == []
    assert body["error_code"] == "location_unavailable"
    assert body["error"] == LocationUnavailableError.message
    assert nearest_spy == []


def test_unmatched_profile_address_is_unavailable(client, auth_headers, seed, nearest_spy):
    seed(Profile(id="p-sos", address="Zzzz Road", city="Qqqq"))

    body = client.post("/emergency/nearby-doctors", json={}, headers=auth_headers("p-sos")).json()
    assert body["error_code"] == "location_unavailable"
    assert nearest_spy == []


def test_anonymous_without_gps_is_not_authenticated(client, nearest_spy):
    body = client.post("/emergency/nearby-doctors", json={}).json()
    assert body["error_code"] == AuthenticationMissingError.code
    assert nearest_spy == []


def test_gps_coordinates_are_used_first(client, doctor, seed, nearest_spy):
    seed(Doctor(id="far", name="Dr. Far", specialization="Cardiology", latitude=19.07, longitude=72.87,
                verified=True, available=True),
         Doctor(id="unverified", name="Dr. Nope", specialization="Cardiology", latitude=28.61, longitude=77.21,
                verified=False, available=True))

    body = client.post("/emergency/nearby-doctors", json={"latitude": 28.6139, "longitude": 77.2090}).json()

    assert body["location_source"] == "GPS"
    assert [d["id"] for d in body["doctors"]] == [doctor, "far"]
    assert body["doctors"][0]["distance"] < body["doctors"][1]["distance"]
    assert body["message"] == "Found 2 doctors using GPS"
    assert nearest_spy == [(28.6139, 77.2090, None)]


def test_profile_address_fallback(client, auth_headers, doctor, seed, nearest_spy):
    seed(Profile(id="p-sos", address="12 Janpath", city="New Delhi"))

    body = client.post("/emergency/nearby-doctors", json={"specialization": "Cardiology"},
                       headers=auth_headers("p-sos")).json()

    assert body["location_source"] == "Profile Address"
    assert (body["latitude"], body["longitude"]) == (28.6139, 77.2090)
    assert [d["id"] for d in body["doctors"]] == [doctor]
    assert nearest_spy == [(28.6139, 77.2090, "Cardiology")]


def test_locate_prefers_explicit_address(run_db):
    loc = run_db(lambda s: emergency.locate(s, None, address="Andheri, Mumbai"))
    assert loc.source == "Address"
    assert (loc.latitude, loc.longitude) == (19.0760, 72.8777)


def test_submit_call_assigns_doctor(client, auth_headers, doctor, patient):
    r = client.post(
        "/emergency/calls",
        json={"patient_name": "Ana Pérez", "address": "Bandra, Mumbai", "symptoms": ["chest pain"],
              "severity": "severe", "doctor_id": doctor},
        headers=auth_headers(patient),
    )
    body = r.json()
    assert r.status_code == 200
    assert body["error"] is None
    assert body["call"]["status"] == EmergencyStatus.assigned.value
    assert body["call"]["doctor_id"] == doctor
    assert body["message"] == "The doctor has been notified and will contact you shortly."

    assigned = client.get("/emergency/calls/assigned", headers=auth_headers(doctor)).json()
    assert [c["id"] for c in assigned] == [body["call"]["id"]]

    mine = client.get("/emergency/calls/me", headers=auth_headers(patient)).json()
    assert len(mine) == 1


def test_submit_call_without_doctor_stays_pending(client, auth_headers, patient):
    body = client.post("/emergency/calls", json={"patient_name": "Ana Pérez"},
                       headers=auth_headers(patient)).json()
    assert body["call"]["status"] == "pending"
    assert body["message"] == "Emergency call created. Help is on the way."


def test_submit_call_with_unknown_doctor_reports_error(client, auth_headers, patient):
    body = client.post("/emergency/calls", json={"patient_name": "Ana Pérez", "doctor_id": "ghost"},
                       headers=auth_headers(patient)).json()
    assert body["call"] is None
    assert body["error"] == "Doctor not found"

    # reintentar tampoco deja llamadas pendientes sueltas
    client.post("/emergency/calls", json={"patient_name": "Ana Pérez", "doctor_id": "ghost"},
                headers=auth_headers(patient))
    assert client.get("/emergency/calls/me", headers=auth_headers(patient)).json() == []


def test_missing_profile_is_reported_as_incomplete(client, auth_headers, nearest_spy):
    body = client.post("/emergency/nearby-doctors", json={}, headers=auth_headers("no-profile")).json()
    assert body["error_code"] == "profile_incomplete"
    assert nearest_spy == []
