"""
SOS: ubicar al paciente, buscar doctores cercanos y crear/asignar la
llamada de emergencia. Todo secuencial, sin reintentos: si un paso falla
se corta y se devuelve el mensaje para el usuario.
"""
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import (
    AuthenticationMissingError,
    LocationUnavailableError,
    NotFoundError,
    ProfileIncompleteError,
    user_message,
)
from app.core.logger import get_module_logger
from app.models.doctor import Doctor
from app.models.emergency import EmergencyCall, EmergencyStatus
from app.models.profile import Profile
from app.schemas.emergency import (
    EmergencyCallCreate,
    EmergencyCallOut,
    EmergencySubmitOut,
    NearbyDoctorsIn,
    NearbyDoctorsOut,
)
from app.services import rpc
from app.utils import geolocation

log = get_module_logger(__name__)


@dataclass
class ResolvedLocation:
    latitude: float
    longitude: float
    source: str
    address: str | None = None


async def locate(
    db: AsyncSession,
    user_id: str | None,
    latitude: float | None = None,
    longitude: float | None = None,
    address: str | None = None,
) -> ResolvedLocation:
    """
    1) coordenadas del dispositivo, 2) dirección explícita,
    3) dirección del perfil geocodificada. Si nada sirve:
    LocationUnavailableError.
    """
    if latitude is not None and longitude is not None:
        return ResolvedLocation(latitude, longitude, "GPS")

    if address and address.strip():
        lat, lon = geolocation.geocode_address(address)
        return ResolvedLocation(lat, lon, "Address", address.strip())

    log.info("GPS unavailable, trying profile address for user %s", user_id)
    if not user_id:
        raise AuthenticationMissingError("User not authenticated and GPS unavailable")

    res = await db.execute(
        select(Profile.address, Profile.city, Profile.region).where(Profile.id == user_id)
    )
    row = res.one_or_none()
    if row is None:
        raise ProfileIncompleteError("User profile not found. Please complete your profile.")
    full_address = geolocation.build_profile_address(*row)
    if not full_address:
        raise LocationUnavailableError()

    lat, lon = geolocation.geocode_address(full_address)
    return ResolvedLocation(lat, lon, "Profile Address", full_address)


async def find_doctors_near(db: AsyncSession, user_id: str | None, payload: NearbyDoctorsIn) -> NearbyDoctorsOut:
    try:
        loc = await locate(db, user_id, payload.latitude, payload.longitude, payload.address)
        doctors = await rpc.find_nearest_doctor(db, loc.latitude, loc.longitude, payload.specialization)
    except Exception as exc:
        log.exception("Error finding doctors near current location (user %s)", user_id)
        return NearbyDoctorsOut(
            doctors=[],
            error=user_message(exc, "Could not access location or find doctors"),
            error_code=getattr(exc, "code", "unknown_error"),
        )

    return NearbyDoctorsOut(
        doctors=doctors,
        location_source=loc.source,
        latitude=loc.latitude,
        longitude=loc.longitude,
        message=f"Found {len(doctors)} doctors using {loc.source}",
    )


async def assign_doctor(db: AsyncSession, call: EmergencyCall, doctor_id: str) -> EmergencyCall:
    """Marca la llamada como asignada. No commitea: lo hace quien llama."""
    res = await db.execute(select(Doctor.id).where(Doctor.id == doctor_id))
    if not res.scalar_one_or_none():
        raise NotFoundError("Doctor not found")
    call.doctor_id = doctor_id
    call.status = EmergencyStatus.assigned
    return call


async def submit_emergency_call(
    db: AsyncSession,
    user_id: str,
    payload: EmergencyCallCreate,
) -> EmergencySubmitOut:
    try:
        data = payload.model_dump(exclude={"doctor_id"})
        call = EmergencyCall(user_id=user_id, status=EmergencyStatus.pending, **data)

        message = "Emergency call created. Help is on the way."
        # el doctor se valida antes de guardar: llamada y asignación van en un solo commit
        if payload.doctor_id:
            await assign_doctor(db, call, payload.doctor_id)
            message = "The doctor has been notified and will contact you shortly."

        db.add(call)
        await db.commit()
        await db.refresh(call)
        log.info("Emergency call %s created by %s (status %s)", call.id, user_id, call.status.value)
        return EmergencySubmitOut(call=EmergencyCallOut.model_validate(call), message=message)
    except Exception as exc:
        log.exception("Error in emergency service (user %s)", user_id)
        return EmergencySubmitOut(call=None, error=user_message(exc))
