"""
Agenda del doctor: turnos directos + franjas reservadas en una sola vista.
Los errores vuelven dentro del cuerpo (`error` / `ok=false`), no como HTTP.
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.api.deps import get_current_user
from app.schemas.auth import AuthUser
from app.schemas.appointment import (
    ApptSource,
    AppointmentStatusIn,
    AppointmentStatusOut,
    UnifiedAppointmentsOut,
)
from app.services import unified_appointments as svc

router = APIRouter(prefix="/doctor/appointments", tags=["doctor-appointments"])


@router.get("/", response_model=UnifiedAppointmentsOut)
async def list_unified(current: AuthUser = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    return await svc.fetch_unified_appointments(db, current.id)


@router.patch("/{id}/status", response_model=AppointmentStatusOut)
async def update_status(
    id: str,
    payload: AppointmentStatusIn,
    current: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await svc.update_appointment_status(db, current.id, id, payload.status, payload.type)


@router.post("/{id}/complete", response_model=AppointmentStatusOut)
async def complete(
    id: str,
    type: ApptSource = Query("direct"),
    current: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await svc.mark_completed(db, current.id, id, type)


@router.post("/{id}/cancel", response_model=AppointmentStatusOut)
async def cancel(
    id: str,
    type: ApptSource = Query("direct"),
    current: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await svc.cancel(db, current.id, id, type)


@router.post("/{id}/confirm", response_model=AppointmentStatusOut)
async def confirm(
    id: str,
    type: ApptSource = Query("direct"),
    current: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await svc.confirm(db, current.id, id, type)
