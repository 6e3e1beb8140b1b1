from __future__ import annotations

import datetime as dt

from sqlalchemy import select

from app.models.appointment import Appointment, ApptStatus
from app.models.health_check import HealthCheck
from app.models.notification import DoctorNotification, NotificationStatus
from app.services.health_check import build_symptoms_payload, forward_health_check


def _check(user_id: str, **kw) -> HealthCheck:
    return HealthCheck(
        user_id=user_id,
        symptoms=["headache", "fever"],
        severity="moderate",
        duration="2 days",
        previous_conditions=["asthma"],
        medications=[],
        symptom_photos={"photo_1": "https://res.cloudinary.com/demo/p1.jpg"},
        **kw,
    )


def _appointment(user_id, doctor_id, days_ahead, status=ApptStatus.pending, at=dt.time(9)):
    return Appointment(
        user_id=user_id, doctor_id=doctor_id, doctor_name="Dr. Meera Rao",
        date=dt.date.today() + dt.timedelta(days=days_ahead), time=at, status=status,
    )


def _notifications(run_db):
    async def _all(session):
        return (await session.execute(select(DoctorNotification))).scalars().all()
    return run_db(_all)


def test_payload_is_denormalized():
    hc = _check("p-1", id="hc-1", notes=None, comprehensive_analysis=True,
                created_at=dt.datetime(2024, 1, 1, 8, 0))
    now = dt.datetime(2024, 1, 2, 9, 30)

    payload = build_symptoms_payload(hc, "ap-1", now=now)

    assert payload["symptoms"] == ["headache", "fever"]
    assert payload["notes"] == ""
    assert payload["analysis_results"] is None
    assert payload["comprehensive_analysis"] is True
    assert payload["check_date"] == "2024-01-01T08:00:00"
    assert payload["symptom_photos"] == {"photo_1": "https://res.cloudinary.com/demo/p1.jpg"}
    assert payload["forwarded_from"] == "health_check_booking"
    assert payload["booking_context"]["appointment_id"] == "ap-1"
    assert payload["booking_context"]["forwarded_at"] == "2024-01-02T09:30:00"


def test_no_upcoming_appointment_returns_false_and_inserts_nothing(patient, doctor, seed, run_db):
    (hc,) = seed(_check(patient))
    seed(
        _appointment(patient, doctor, 10),
        _appointment(patient, doctor, 2, status=ApptStatus.cancelled),
        _appointment(patient, doctor, -1),
    )

    sent, target = run_db(lambda s: forward_health_check(s, patient, hc))

    assert sent is False
    assert target is None
    assert _notifications(run_db) == []


def test_forwards_to_earliest_upcoming_appointment_doctor(patient, doctor, seed, run_db):
    (hc,) = seed(_check(patient))
    later, earliest = seed(
        _appointment(patient, "other-doctor", 5),
        _appointment(patient, doctor, 1, status=ApptStatus.confirmed),
    )

    sent, target = run_db(lambda s: forward_health_check(s, patient, hc))

    assert sent is True
    assert target == earliest.id
    (n,) = _notifications(run_db)
    assert n.doctor_id == doctor
    assert n.patient_id == patient
    assert n.appointment_id == earliest.id
    assert n.health_check_id == hc.id
    assert n.status == NotificationStatus.sent
    assert n.symptoms_data["forwarded_from"] == "health_check_booking"


def test_explicit_appointment_must_belong_to_patient(patient, doctor, seed, run_db):
    (hc,) = seed(_check(patient))
    (foreign,) = seed(_appointment("someone-else", doctor, 1))

    sent, target = run_db(lambda s: forward_health_check(s, patient, hc, foreign.id))
    assert (sent, target) == (False, None)
    assert _notifications(run_db) == []


def test_health_check_endpoints(client, auth_headers, patient, doctor, seed):
    seed(_appointment(patient, doctor, 3))
    h = auth_headers(patient)

    r = client.post("/health-checks/", json={"symptoms": ["cough"], "severity": "mild"}, headers=h)
    assert r.status_code == 201
    hc_id = r.json()["id"]
    assert r.json()["symptom_photos"] == {}

    assert [c["id"] for c in client.get("/health-checks/me", headers=h).json()] == [hc_id]
    assert client.get(f"/health-checks/{hc_id}", headers=auth_headers("intruder")).status_code == 404

    r = client.post(f"/health-checks/{hc_id}/forward", json={}, headers=h)
    assert r.status_code == 200
    assert r.json()["sent"] is True
    assert r.json()["message"] == "Health check data has been shared with your doctor."

    notes = client.get("/notifications/", headers=auth_headers(doctor)).json()
    assert len(notes) == 1
    assert notes[0]["patient_name"] == "Ana Pérez"
    assert notes[0]["symptoms_data"]["symptoms"] == ["cough"]


def test_health_check_requires_symptoms(client, auth_headers, patient):
    r = client.post("/health-checks/", json={"symptoms": []}, headers=auth_headers(patient))
    assert r.status_code == 422


def test_symptom_photo_upload(client, auth_headers, patient, monkeypatch):
    from app.core import cdn

    uploaded = []

    def fake_upload(file_bytes, folder, public_id=None):
        uploaded.append((folder, public_id))
        return f"https://res.cloudinary.com/demo/{public_id}.png", public_id

    monkeypatch.setattr(cdn, "upload_symptom_photo", fake_upload)
    h = auth_headers(patient)
    hc_id = client.post("/health-checks/", json={"symptoms": ["rash"]}, headers=h).json()["id"]

    r = client.post(
        f"/health-checks/{hc_id}/photos",
        files=[("files", ("a.png", b"png-bytes", "image/png")), ("files", ("b.jpg", b"jpg-bytes", "image/jpeg"))],
        headers=h,
    )
    assert r.status_code == 200
    assert set(r.json()["symptom_photos"]) == {"photo_1", "photo_2"}
    assert uploaded[0] == (f"healthbridge/symptom-photos/{patient}", f"{hc_id}_photo_1")

    r = client.post(f"/health-checks/{hc_id}/photos",
                    files=[("files", ("c.gif", b"gif", "image/gif"))], headers=h)
    assert r.status_code == 415

    too_many = [("files", (f"{i}.png", b"x", "image/png")) for i in range(4)]
    r = client.post(f"/health-checks/{hc_id}/photos", files=too_many, headers=h)
    assert r.status_code == 400


def test_failed_photo_batch_discards_partial_uploads(client, auth_headers, patient, monkeypatch):
    from app.core import cdn

    destroyed = []

    def flaky_upload(file_bytes, folder, public_id=None):
        if public_id.endswith("photo_2"):
            raise RuntimeError("cloudinary timeout")
        return f"https://res.cloudinary.com/demo/{public_id}.png", public_id

    monkeypatch.setattr(cdn, "upload_symptom_photo", flaky_upload)
    monkeypatch.setattr(cdn, "destroy", destroyed.append)
    h = auth_headers(patient)
    hc_id = client.post("/health-checks/", json={"symptoms": ["rash"]}, headers=h).json()["id"]

    r = client.post(
        f"/health-checks/{hc_id}/photos",
        files=[("files", ("a.png", b"png-bytes", "image/png")), ("files", ("b.png", b"png-bytes", "image/png"))],
        headers=h,
    )

    assert r.status_code == 502
    assert destroyed == [f"{hc_id}_photo_1"]
    assert client.get(f"/health-checks/{hc_id}", headers=h).json()["symptom_photos"] in (None, {})
