from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.api.deps import get_current_user
from app.models.profile import Profile
from app.schemas.auth import AuthUser
from app.schemas.profile import ProfileUpdate, ProfileOut

router = APIRouter(prefix="/profiles", tags=["profiles"])


async def _get_or_create_profile(user: AuthUser, db: AsyncSession) -> Profile:
    # el proveedor de auth no crea la fila: se crea en el primer acceso
    res = await db.execute(select(Profile).where(Profile.id == user.id))
    p = res.scalar_one_or_none()
    if not p:
        p = Profile(id=user.id)
        db.add(p)
        await db.commit()
        await db.refresh(p)
    return p


@router.get("/me", response_model=ProfileOut)
async def my_profile(current: AuthUser = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    p = await _get_or_create_profile(current, db)
    return ProfileOut.from_model(p)


@router.patch("/me", response_model=ProfileOut)
async def update_my_profile(
    payload: ProfileUpdate,
    current: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    p = await _get_or_create_profile(current, db)
    for k, v in payload.model_dump(exclude_unset=True).items():
        setattr(p, k, v)
    await db.commit()
    await db.refresh(p)
    return ProfileOut.from_model(p)
