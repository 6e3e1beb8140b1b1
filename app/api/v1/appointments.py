from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.core.logger import get_module_logger
from app.api.deps import get_current_user
from app.models.appointment import Appointment, ApptStatus
from app.models.doctor import Doctor
from app.schemas.auth import AuthUser
from app.schemas.appointment import AppointmentCreate, AppointmentOut
from app.services.health_check import upcoming_appointments
from app.services.unified_appointments import DEFAULT_REASON

log = get_module_logger(__name__)

router = APIRouter(prefix="/appointments", tags=["appointments"])


# ---------- helpers ----------
async def _resolve_doctor(payload: AppointmentCreate, db: AsyncSession) -> Doctor:
    if payload.doctor_id:
        q = select(Doctor).where(Doctor.id == payload.doctor_id)
    else:
        q = select(Doctor).where(Doctor.name == payload.doctor_name)
    res = await db.execute(q)
    doc = res.scalars().first()
    if not doc:
        raise HTTPException(status_code=404, detail="Doctor not found")
    if not doc.verified:
        raise HTTPException(status_code=400, detail="Doctor profile is not verified")
    return doc


# ---------- create ----------
@router.post("/", response_model=AppointmentOut, status_code=201)
async def book_appointment(
    payload: AppointmentCreate,
    current: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    doc = await _resolve_doctor(payload, db)
    ap = Appointment(
        user_id=current.id,
        doctor_id=doc.id,
        doctor_name=doc.name,
        doctor_specialty=doc.specialization,
        date=payload.date,
        time=payload.time,
        status=ApptStatus.pending,
        reason=payload.reason or DEFAULT_REASON,
        notes=payload.notes,
    )
    db.add(ap)
    await db.commit()
    await db.refresh(ap)
    log.info("Appointment %s booked by %s with doctor %s", ap.id, current.id, doc.id)
    return ap


# ---------- list ----------
@router.get("/me", response_model=list[AppointmentOut])
async def my_appointments(current: AuthUser = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    res = await db.execute(
        select(Appointment)
        .where(Appointment.user_id == current.id)
        .order_by(Appointment.date, Appointment.time)
    )
    return res.scalars().all()


@router.get("/upcoming", response_model=list[AppointmentOut])
async def my_upcoming_appointments(current: AuthUser = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    return await upcoming_appointments(db, current.id)
