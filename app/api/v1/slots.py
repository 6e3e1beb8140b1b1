from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy import select, update, delete
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.core.logger import get_module_logger
from app.api.deps import get_current_user, require_doctor
from app.models.doctor import Doctor
from app.models.slot import AppointmentSlot, SlotStatus
from app.schemas.auth import AuthUser
from app.schemas.slot import (
    SlotCreate,
    SlotStatusIn,
    SlotBookIn,
    SlotOut,
    AvailableSlotOut,
    SlotPickerOut,
)
from app.services.slot_picker import list_available_slots, group_slots_by_date

log = get_module_logger(__name__)

router = APIRouter(prefix="/slots", tags=["slots"])


async def _get_own_slot_or_404(id: str, doctor: Doctor, db: AsyncSession) -> AppointmentSlot:
    res = await db.execute(
        select(AppointmentSlot).where(AppointmentSlot.id == id, AppointmentSlot.doctor_id == doctor.id)
    )
    s = res.scalar_one_or_none()
    if not s:
        raise HTTPException(status_code=404, detail="Slot not found")
    return s


# ---------- doctor: CRUD de franjas ----------
@router.post("/", response_model=SlotOut, status_code=201)
async def create_slot(
    payload: SlotCreate,
    doctor: Doctor = Depends(require_doctor),
    db: AsyncSession = Depends(get_db),
):
    # sin chequeo de solapamiento
    doctor_id = payload.doctor_id or doctor.id
    if doctor_id != doctor.id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Cannot create slots for another doctor")

    s = AppointmentSlot(**payload.model_dump(exclude={"doctor_id", "status"}),
                        doctor_id=doctor_id,
                        status=SlotStatus(payload.status))
    db.add(s)
    await db.commit()
    await db.refresh(s)
    return s


@router.get("/", response_model=list[SlotOut])
async def list_my_slots(doctor: Doctor = Depends(require_doctor), db: AsyncSession = Depends(get_db)):
    res = await db.execute(
        select(AppointmentSlot)
        .where(AppointmentSlot.doctor_id == doctor.id)
        .order_by(AppointmentSlot.date, AppointmentSlot.start_time)
    )
    return res.scalars().all()


@router.delete("/{id}", status_code=204)
async def delete_slot(id: str, doctor: Doctor = Depends(require_doctor), db: AsyncSession = Depends(get_db)):
    await _get_own_slot_or_404(id, doctor, db)
    await db.execute(delete(AppointmentSlot).where(AppointmentSlot.id == id))
    await db.commit()
    return Response(status_code=204)


@router.patch("/{id}/status", response_model=SlotOut)
async def update_slot_status(
    id: str,
    payload: SlotStatusIn,
    doctor: Doctor = Depends(require_doctor),
    db: AsyncSession = Depends(get_db),
):
    s = await _get_own_slot_or_404(id, doctor, db)
    s.status = SlotStatus(payload.status)
    await db.commit()
    await db.refresh(s)
    return s


# ---------- paciente: selector y reserva ----------
@router.get("/available", response_model=list[AvailableSlotOut])
async def available_slots(doctor_id: str | None = Query(None), db: AsyncSession = Depends(get_db)):
    return await list_available_slots(db, doctor_id)


@router.get("/available/grouped", response_model=SlotPickerOut)
async def available_slots_grouped(
    doctor_id: str | None = Query(None),
    max_days: int = Query(3, ge=1, le=31),
    per_day: int = Query(4, ge=1, le=48),
    db: AsyncSession = Depends(get_db),
):
    slots = await list_available_slots(db, doctor_id)
    return group_slots_by_date(slots, max_days=max_days, per_day=per_day)


@router.post("/{id}/book", response_model=SlotOut)
async def book_slot(
    id: str,
    payload: SlotBookIn,
    current: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    # update condicional: sólo reserva si sigue libre
    res = await db.execute(
        update(AppointmentSlot)
        .where(AppointmentSlot.id == id, AppointmentSlot.status == SlotStatus.available)
        .values(
            status=SlotStatus.booked,
            user_id=current.id,
            patient_name=payload.patient_name,
            reason=payload.reason,
        )
    )
    if res.rowcount == 0:
        await db.rollback()
        exists = (await db.execute(select(AppointmentSlot.id).where(AppointmentSlot.id == id))).scalar_one_or_none()
        if not exists:
            raise HTTPException(status_code=404, detail="Slot not found")
        raise HTTPException(status_code=409, detail="Slot is no longer available")
    await db.commit()

    res = await db.execute(select(AppointmentSlot).where(AppointmentSlot.id == id))
    s = res.scalar_one()
    log.info("Slot %s booked by %s", id, current.id)
    return s
