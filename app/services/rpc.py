"""
Procedimientos remotos: consultas con nombre que el resto de los servicios
invoca como si fueran una función del servidor.
"""
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.models.doctor import Doctor
from app.models.profile import Profile
from app.utils.geolocation import haversine_km


async def get_patient_display_name(db: AsyncSession, user_uuid: str) -> str | None:
    res = await db.execute(
        select(Profile.first_name, Profile.last_name).where(Profile.id == user_uuid)
    )
    row = res.one_or_none()
    if not row:
        return None
    name = " ".join(p.strip() for p in (row.first_name, row.last_name) if p and p.strip())
    return name or None


async def find_nearest_doctor(
    db: AsyncSession,
    lat: float,
    long: float,
    specialization_filter: str | None = None,
    limit: int | None = None,
) -> list[dict]:
    """
    Doctores verificados y disponibles con coordenadas, ordenados por
    distancia (km) al punto dado.
    """
    q = select(Doctor).where(
        Doctor.verified.is_(True),
        Doctor.available.is_(True),
        Doctor.latitude.is_not(None),
        Doctor.longitude.is_not(None),
    )
    if specialization_filter:
        q = q.where(Doctor.specialization == specialization_filter)

    res = await db.execute(q)
    rows = [
        {
            "id": d.id,
            "name": d.name,
            "specialization": d.specialization,
            "hospital": d.hospital,
            "address": d.address,
            "distance": round(haversine_km(lat, long, d.latitude, d.longitude), 2),
        }
        for d in res.scalars().all()
    ]
    rows.sort(key=lambda r: r["distance"])
    return rows[: limit or settings.NEARBY_DOCTORS_LIMIT]
