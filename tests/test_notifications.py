from __future__ import annotations

import datetime as dt

import pytest

from app.models.appointment import Appointment
from app.models.notification import DoctorNotification


@pytest.fixture
def notification(doctor, patient, seed) -> str:
    (ap,) = seed(Appointment(user_id=patient, doctor_id=doctor, doctor_name="Dr. Meera Rao",
                             date=dt.date(2030, 5, 4), time=dt.time(15, 30)))
    (n,) = seed(DoctorNotification(doctor_id=doctor, patient_id=patient, appointment_id=ap.id,
                                   health_check_id="hc-1", symptoms_data={"symptoms": ["fever"]}))
    return n.id


def test_list_shows_patient_and_appointment(client, auth_headers, doctor, notification):
    (n,) = client.get("/notifications/", headers=auth_headers(doctor)).json()
    assert n["id"] == notification
    assert n["status"] == "sent"
    assert n["patient_name"] == "Ana Pérez"
    assert n["appointment_date"] == "2030-05-04"
    assert n["appointment_time"] == "15:30:00"


def test_status_only_moves_forward(client, auth_headers, doctor, notification):
    h = auth_headers(doctor)

    assert client.post(f"/notifications/{notification}/read", headers=h).json()["status"] == "read"
    assert client.post(f"/notifications/{notification}/acknowledge", headers=h).json()["status"] == "acknowledged"
    assert client.post(f"/notifications/{notification}/read", headers=h).json()["status"] == "acknowledged"


def test_other_doctors_cannot_touch_notification(client, auth_headers, notification, patient):
    r = client.post(f"/notifications/{notification}/read", headers=auth_headers(patient))
    assert r.status_code == 403


def test_filter_by_status(client, auth_headers, doctor, notification):
    h = auth_headers(doctor)
    assert client.get("/notifications/", params={"status": "read"}, headers=h).json() == []
    assert len(client.get("/notifications/", params={"status": "sent"}, headers=h).json()) == 1
