from __future__ import annotations

import datetime as dt

from app.models.slot import AppointmentSlot, SlotStatus
from app.schemas.slot import AvailableSlotOut
from app.services.slot_picker import group_slots_by_date


def _day(offset: int) -> str:
    return (dt.date.today() + dt.timedelta(days=offset)).isoformat()


def _create(client, headers, day, start, end, **extra):
    return client.post(
        "/slots/",
        json={"date": day, "start_time": start, "end_time": end, "duration": 30, **extra},
        headers=headers,
    )


def test_doctor_creates_and_lists_own_slots(client, auth_headers, doctor):
    h = auth_headers(doctor)
    r = _create(client, h, _day(2), "10:00:00", "10:30:00")
    assert r.status_code == 201
    assert r.json()["doctor_id"] == doctor
    assert r.json()["status"] == "available"
    _create(client, h, _day(1), "09:00:00", "09:30:00")

    r = client.get("/slots/", headers=h)
    assert r.status_code == 200
    assert [s["date"] for s in r.json()] == [_day(1), _day(2)]


def test_non_doctor_cannot_manage_slots(client, auth_headers, patient):
    r = _create(client, auth_headers(patient), _day(1), "09:00:00", "09:30:00")
    assert r.status_code == 403


def test_cannot_create_slot_for_another_doctor(client, auth_headers, doctor):
    r = _create(client, auth_headers(doctor), _day(1), "09:00:00", "09:30:00", doctor_id="someone-else")
    assert r.status_code == 403


def test_delete_and_status_write(client, auth_headers, doctor):
    h = auth_headers(doctor)
    slot_id = _create(client, h, _day(1), "09:00:00", "09:30:00").json()["id"]

    r = client.patch(f"/slots/{slot_id}/status", json={"status": "cancelled"}, headers=h)
    assert r.status_code == 200
    assert r.json()["status"] == "cancelled"

    r = client.delete(f"/slots/{slot_id}", headers=h)
    assert r.status_code == 204
    assert client.get("/slots/", headers=h).json() == []

    r = client.delete(f"/slots/{slot_id}", headers=h)
    assert r.status_code == 404


def test_available_slots_include_doctor_summary(client, auth_headers, doctor, seed):
    today = dt.date.today()
    seed(
        AppointmentSlot(doctor_id=doctor, date=today + dt.timedelta(days=1),
                        start_time=dt.time(9), end_time=dt.time(9, 30)),
        AppointmentSlot(doctor_id=doctor, date=today - dt.timedelta(days=1),
                        start_time=dt.time(9), end_time=dt.time(9, 30)),
        AppointmentSlot(doctor_id=doctor, date=today + dt.timedelta(days=2),
                        start_time=dt.time(9), end_time=dt.time(9, 30), status=SlotStatus.booked),
    )

    r = client.get("/slots/available")
    assert r.status_code == 200
    body = r.json()
    assert len(body) == 1
    assert body[0]["doctor"] == {"name": "Dr. Meera Rao", "specialization": "Cardiology", "hospital": "City Hospital"}


def test_booking_only_succeeds_while_available(client, auth_headers, doctor, patient, seed):
    (slot,) = seed(AppointmentSlot(doctor_id=doctor, date=dt.date.today() + dt.timedelta(days=1),
                                   start_time=dt.time(11), end_time=dt.time(11, 30)))

    r = client.post(f"/slots/{slot.id}/book", json={"patient_name": "Ana Pérez", "reason": "Checkup"},
                    headers=auth_headers(patient))
    assert r.status_code == 200
    assert r.json()["status"] == "booked"
    assert r.json()["user_id"] == patient

    r = client.post(f"/slots/{slot.id}/book", json={"patient_name": "Someone"}, headers=auth_headers("other"))
    assert r.status_code == 409

    r = client.post("/slots/missing/book", json={"patient_name": "Someone"}, headers=auth_headers(patient))
    assert r.status_code == 404


def test_grouped_endpoint(client, doctor, seed):
    today = dt.date.today()
    seed(*[
        AppointmentSlot(doctor_id=doctor, date=today + dt.timedelta(days=d),
                        start_time=dt.time(9 + h), end_time=dt.time(9 + h, 30))
        for d in (1, 2) for h in range(5)
    ])

    r = client.get("/slots/available/grouped", params={"max_days": 1, "per_day": 2})
    assert r.status_code == 200
    body = r.json()
    assert body["total"] == 10
    assert body["more_days"] == 1
    assert len(body["days"]) == 1
    assert len(body["days"][0]["slots"]) == 2
    assert body["days"][0]["more"] == 3


def _available(day: dt.date, hour: int) -> AvailableSlotOut:
    return AvailableSlotOut(
        id=f"{day}-{hour}", doctor_id="d", date=day, start_time=dt.time(hour),
        end_time=dt.time(hour, 30), duration=30, max_patients=1, status="available",
    )


def test_group_slots_by_date_limits():
    d1, d2, d3, d4 = (dt.date(2030, 1, i) for i in range(1, 5))
    slots = [_available(d1, 9), _available(d1, 10), _available(d1, 11), _available(d1, 12), _available(d1, 13),
             _available(d2, 9), _available(d3, 9), _available(d4, 9)]

    out = group_slots_by_date(slots)

    assert [g.date for g in out.days] == [d1, d2, d3]
    assert len(out.days[0].slots) == 4
    assert out.days[0].more == 1
    assert out.days[1].more == 0
    assert out.more_days == 1
    assert out.total == 8


def test_group_slots_by_date_empty():
    out = group_slots_by_date([])
    assert out.days == [] and out.more_days == 0 and out.total == 0
