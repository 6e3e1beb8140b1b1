from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.models.doctor import Doctor
from app.schemas.doctor import DoctorOut

router = APIRouter(prefix="/doctors", tags=["doctors"])


async def _get_doctor_or_404(id: str, db: AsyncSession) -> Doctor:
    res = await db.execute(select(Doctor).where(Doctor.id == id))
    d = res.scalar_one_or_none()
    if not d:
        raise HTTPException(status_code=404, detail="Doctor not found")
    return d


# --------- list ----------
@router.get("/", response_model=list[DoctorOut])
async def list_doctors(
    specialization: str | None = Query(None),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_db),
):
    """Sólo doctores verificados y disponibles, por nombre."""
    q = select(Doctor).where(Doctor.verified.is_(True), Doctor.available.is_(True))
    if specialization:
        q = q.where(Doctor.specialization == specialization)
    res = await db.execute(q.order_by(Doctor.name).offset(offset).limit(limit))
    return [DoctorOut.from_model(d) for d in res.scalars().all()]


# ---------- read ----------
@router.get("/{id}", response_model=DoctorOut)
async def get_doctor(id: str, db: AsyncSession = Depends(get_db)):
    d = await _get_doctor_or_404(id, db)
    return DoctorOut.from_model(d)
