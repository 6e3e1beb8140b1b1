from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.api.deps import get_current_user
from app.schemas.doctor import NearbyDoctorOut
from app.schemas.rpc import DisplayNameIn, NearestDoctorIn
from app.services import rpc

router = APIRouter(prefix="/rpc", tags=["rpc"], dependencies=[Depends(get_current_user)])


@router.post("/get_patient_display_name", response_model=str | None)
async def get_patient_display_name(payload: DisplayNameIn, db: AsyncSession = Depends(get_db)):
    return await rpc.get_patient_display_name(db, payload.user_uuid)


@router.post("/find_nearest_doctor", response_model=list[NearbyDoctorOut])
async def find_nearest_doctor(payload: NearestDoctorIn, db: AsyncSession = Depends(get_db)):
    return await rpc.find_nearest_doctor(db, payload.lat, payload.long, payload.specialization_filter)
