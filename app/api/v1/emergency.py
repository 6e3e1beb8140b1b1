from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.api.deps import get_current_user, get_optional_user, require_doctor
from app.models.doctor import Doctor
from app.models.emergency import EmergencyCall
from app.schemas.auth import AuthUser
from app.schemas.emergency import (
    NearbyDoctorsIn,
    NearbyDoctorsOut,
    EmergencyCallCreate,
    EmergencyCallOut,
    EmergencySubmitOut,
)
from app.services import emergency as svc

router = APIRouter(prefix="/emergency", tags=["emergency"])


@router.post("/nearby-doctors", response_model=NearbyDoctorsOut)
async def nearby_doctors(
    payload: NearbyDoctorsIn,
    current: AuthUser | None = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db),
):
    # sin GPS ni dirección hace falta el usuario para usar la dirección del perfil
    return await svc.find_doctors_near(db, current.id if current else None, payload)


@router.post("/calls", response_model=EmergencySubmitOut)
async def create_emergency_call(
    payload: EmergencyCallCreate,
    current: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await svc.submit_emergency_call(db, current.id, payload)


@router.get("/calls/me", response_model=list[EmergencyCallOut])
async def my_emergency_calls(current: AuthUser = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    res = await db.execute(
        select(EmergencyCall).where(EmergencyCall.user_id == current.id).order_by(EmergencyCall.created_at.desc())
    )
    return res.scalars().all()


@router.get("/calls/assigned", response_model=list[EmergencyCallOut])
async def assigned_emergency_calls(doctor: Doctor = Depends(require_doctor), db: AsyncSession = Depends(get_db)):
    res = await db.execute(
        select(EmergencyCall).where(EmergencyCall.doctor_id == doctor.id).order_by(EmergencyCall.created_at.desc())
    )
    return res.scalars().all()
