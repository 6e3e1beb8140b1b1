import datetime as dt
from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.slot import AppointmentSlot, SlotStatus
from app.schemas.doctor import DoctorSummary
from app.schemas.slot import AvailableSlotOut, SlotDayGroup, SlotOut, SlotPickerOut


def to_available_out(slot: AppointmentSlot) -> AvailableSlotOut:
    # requiere AppointmentSlot.doctor cargado (selectinload)
    doctor = None
    if slot.doctor is not None:
        doctor = DoctorSummary(
            name=slot.doctor.name,
            specialization=slot.doctor.specialization,
            hospital=slot.doctor.hospital,
        )
    return AvailableSlotOut(**SlotOut.model_validate(slot).model_dump(), doctor=doctor)


async def list_available_slots(
    db: AsyncSession,
    doctor_id: str | None = None,
    today: dt.date | None = None,
) -> list[AvailableSlotOut]:
    """Franjas libres desde hoy, ordenadas por fecha y hora de inicio."""
    today = today or dt.date.today()
    q = (
        select(AppointmentSlot)
        .options(selectinload(AppointmentSlot.doctor))
        .where(AppointmentSlot.status == SlotStatus.available, AppointmentSlot.date >= today)
    )
    if doctor_id:
        q = q.where(AppointmentSlot.doctor_id == doctor_id)
    res = await db.execute(q.order_by(AppointmentSlot.date, AppointmentSlot.start_time))
    return [to_available_out(s) for s in res.scalars().all()]


def group_slots_by_date(
    slots: Sequence[AvailableSlotOut],
    max_days: int = 3,
    per_day: int = 4,
) -> SlotPickerOut:
    """
    Agrupa por fecha (en el orden recibido) y recorta a `max_days` días y
    `per_day` franjas por día; lo que queda afuera se informa en los
    contadores `more` / `more_days`.
    """
    by_date: dict[dt.date, list[AvailableSlotOut]] = {}
    for s in slots:
        by_date.setdefault(s.date, []).append(s)

    days = [
        SlotDayGroup(date=day, slots=day_slots[:per_day], more=max(len(day_slots) - per_day, 0))
        for day, day_slots in list(by_date.items())[:max_days]
    ]
    return SlotPickerOut(
        days=days,
        more_days=max(len(by_date) - max_days, 0),
        total=len(slots),
    )
