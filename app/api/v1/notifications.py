from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.api.deps import require_doctor
from app.models.appointment import Appointment
from app.models.doctor import Doctor
from app.models.notification import DoctorNotification, NotificationStatus, NOTIFICATION_STATUS_ORDER
from app.schemas.notification import NotificationOut
from app.services.unified_appointments import resolve_patient_name

router = APIRouter(prefix="/notifications", tags=["notifications"])


async def _get_own_notification_or_404(id: str, doctor: Doctor, db: AsyncSession) -> DoctorNotification:
    res = await db.execute(
        select(DoctorNotification).where(DoctorNotification.id == id, DoctorNotification.doctor_id == doctor.id)
    )
    n = res.scalar_one_or_none()
    if not n:
        raise HTTPException(status_code=404, detail="Notification not found")
    return n


async def _to_out(n: DoctorNotification, appointment: Appointment | None, db: AsyncSession) -> NotificationOut:
    return NotificationOut.model_validate(n).model_copy(update={
        "patient_name": await resolve_patient_name(db, n.patient_id),
        "appointment_date": appointment.date if appointment else None,
        "appointment_time": appointment.time if appointment else None,
    })


async def _advance(id: str, target: NotificationStatus, doctor: Doctor, db: AsyncSession) -> NotificationOut:
    n = await _get_own_notification_or_404(id, doctor, db)
    # nunca retrocede (acknowledged -> read no hace nada)
    if NOTIFICATION_STATUS_ORDER[NotificationStatus(n.status)] < NOTIFICATION_STATUS_ORDER[target]:
        n.status = target
        await db.commit()
        await db.refresh(n)
    ap = (await db.execute(select(Appointment).where(Appointment.id == n.appointment_id))).scalar_one_or_none()
    return await _to_out(n, ap, db)


@router.get("/", response_model=list[NotificationOut])
async def list_notifications(
    status: NotificationStatus | None = Query(None),
    doctor: Doctor = Depends(require_doctor),
    db: AsyncSession = Depends(get_db),
):
    """Más nuevas primero, con nombre del paciente y fecha/hora del turno."""
    q = (
        select(DoctorNotification, Appointment)
        .outerjoin(Appointment, Appointment.id == DoctorNotification.appointment_id)
        .where(DoctorNotification.doctor_id == doctor.id)
    )
    if status:
        q = q.where(DoctorNotification.status == status)
    res = await db.execute(q.order_by(DoctorNotification.created_at.desc()))
    return [await _to_out(n, ap, db) for n, ap in res.all()]


@router.post("/{id}/read", response_model=NotificationOut)
async def mark_read(id: str, doctor: Doctor = Depends(require_doctor), db: AsyncSession = Depends(get_db)):
    return await _advance(id, NotificationStatus.read, doctor, db)


@router.post("/{id}/acknowledge", response_model=NotificationOut)
async def acknowledge(id: str, doctor: Doctor = Depends(require_doctor), db: AsyncSession = Depends(get_db)):
    return await _advance(id, NotificationStatus.acknowledged, doctor, db)
