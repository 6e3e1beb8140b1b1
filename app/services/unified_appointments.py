"""
Vista unificada de turnos del doctor.

Junta dos fuentes distintas, los turnos directos (`appointments`) y las
franjas reservadas (`appointment_slots` con status != available), en una
sola secuencia ordenada por (fecha, hora). La vista no se persiste: se
recalcula en cada fetch.

Vocabulario de estados:
    franja `booked`  -> se muestra como `confirmed`
    `confirmed`      -> se escribe como `booked` en la franja
    cancelled / completed pasan igual en ambos sentidos
    `pending` no existe para franjas (InvalidStatusError)
"""
from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import AppError, InvalidStatusError, NotFoundError, user_message
from app.core.logger import get_module_logger
from app.models.appointment import Appointment, ApptStatus
from app.models.doctor import Doctor
from app.models.profile import Profile
from app.models.slot import AppointmentSlot, SlotStatus
from app.schemas.appointment import (
    AppointmentStatusOut,
    UnifiedAppointment,
    UnifiedAppointmentsOut,
)
from app.services import rpc

log = get_module_logger(__name__)

UNKNOWN_PATIENT = "Unknown Patient"
DEFAULT_REASON = "General consultation"

_SLOT_TO_UNIFIED = {SlotStatus.booked: "confirmed"}
_UNIFIED_TO_SLOT = {
    "confirmed": SlotStatus.booked,
    "cancelled": SlotStatus.cancelled,
    "completed": SlotStatus.completed,
}


def to_unified_status(slot_status: SlotStatus | str) -> str:
    status = SlotStatus(slot_status)
    return _SLOT_TO_UNIFIED.get(status, status.value)


def to_slot_status(status: str) -> SlotStatus:
    try:
        return _UNIFIED_TO_SLOT[status]
    except KeyError:
        raise InvalidStatusError(f"Status '{status}' cannot be applied to a slot appointment")


async def ensure_doctor_access(db: AsyncSession, user_id: str) -> Doctor:
    """El usuario tiene que ser doctor y estar verificado."""
    res = await db.execute(select(Profile.is_doctor).where(Profile.id == user_id))
    if not res.scalar_one_or_none():
        raise AppError("User does not have doctor access")

    res = await db.execute(select(Doctor).where(Doctor.id == user_id))
    doctor = res.scalar_one_or_none()
    if not doctor:
        raise NotFoundError("Doctor profile not found")
    if not doctor.verified:
        raise AppError("Doctor profile is not verified")
    return doctor


async def resolve_patient_name(db: AsyncSession, user_id: str | None, stored_name: str | None = None) -> str:
    """
    RPC de nombre visible -> nombre guardado en la fila -> placeholder.
    Un fallo del lookup se loguea y no corta la vista.
    """
    if user_id:
        try:
            name = await rpc.get_patient_display_name(db, user_id)
            if name:
                return name
        except SQLAlchemyError:
            log.warning("Error getting patient name for %s", user_id, exc_info=True)
    return stored_name or UNKNOWN_PATIENT


async def _unify(db: AsyncSession, doctor_id: str) -> list[UnifiedAppointment]:
    direct = (await db.execute(
        select(Appointment)
        .where(Appointment.doctor_id == doctor_id)
        .order_by(Appointment.date, Appointment.time)
    )).scalars().all()

    slots = (await db.execute(
        select(AppointmentSlot)
        .where(
            AppointmentSlot.doctor_id == doctor_id,
            AppointmentSlot.status != SlotStatus.available,
        )
        .order_by(AppointmentSlot.date, AppointmentSlot.start_time)
    )).scalars().all()

    log.info("Doctor %s: %d direct appointments, %d slot appointments", doctor_id, len(direct), len(slots))

    unified: list[UnifiedAppointment] = []
    for ap in direct:
        unified.append(UnifiedAppointment(
            id=ap.id,
            date=ap.date,
            time=ap.time,
            patient_name=await resolve_patient_name(db, ap.user_id),
            reason=ap.reason or DEFAULT_REASON,
            status=ApptStatus(ap.status).value,
            notes=ap.notes,
            type="direct",
            user_id=ap.user_id,
            doctor_id=ap.doctor_id,
            doctor_name=ap.doctor_name,
        ))

    for slot in slots:
        unified.append(UnifiedAppointment(
            id=slot.id,
            date=slot.date,
            time=slot.start_time,
            patient_name=await resolve_patient_name(db, slot.user_id, slot.patient_name),
            reason=slot.reason or DEFAULT_REASON,
            status=to_unified_status(slot.status),
            type="slot",
            user_id=slot.user_id,
            doctor_id=slot.doctor_id,
            start_time=slot.start_time,
            end_time=slot.end_time,
        ))

    # sort estable: ante empate queda primero el directo
    unified.sort(key=lambda a: (a.date, a.time))
    return unified


async def fetch_unified_appointments(db: AsyncSession, doctor_id: str) -> UnifiedAppointmentsOut:
    """
    Cualquier error de fetch corta todo: lista vacía + error (no se
    devuelven datos parciales).
    """
    try:
        await ensure_doctor_access(db, doctor_id)
        return UnifiedAppointmentsOut(appointments=await _unify(db, doctor_id))
    except Exception as exc:
        log.exception("Error fetching unified appointments for doctor %s", doctor_id)
        return UnifiedAppointmentsOut(
            appointments=[],
            error=user_message(exc, "Failed to fetch appointments"),
        )


async def update_appointment_status(
    db: AsyncSession,
    doctor_id: str,
    appointment_id: str,
    status: str,
    type_: str,
) -> AppointmentStatusOut:
    """
    Escribe en la tabla de origen y vuelve a correr el fetch completo
    (sin merge optimista).
    """
    try:
        await ensure_doctor_access(db, doctor_id)
        if type_ == "direct":
            res = await db.execute(
                update(Appointment)
                .where(Appointment.id == appointment_id, Appointment.doctor_id == doctor_id)
                .values(status=ApptStatus(status))
            )
        else:
            res = await db.execute(
                update(AppointmentSlot)
                .where(AppointmentSlot.id == appointment_id, AppointmentSlot.doctor_id == doctor_id)
                .values(status=to_slot_status(status))
            )
        if res.rowcount == 0:
            raise NotFoundError("Appointment not found")
        await db.commit()
    except Exception as exc:
        await db.rollback()
        log.exception("Error updating appointment %s (%s) to %s", appointment_id, type_, status)
        return AppointmentStatusOut(
            ok=False,
            message="Failed to update appointment status.",
            error=user_message(exc, "Failed to update appointment status."),
        )

    refreshed = await fetch_unified_appointments(db, doctor_id)
    return AppointmentStatusOut(
        ok=True,
        message="Appointment status updated successfully.",
        appointments=refreshed.appointments,
        error=refreshed.error,
    )


async def mark_completed(db: AsyncSession, doctor_id: str, appointment_id: str, type_: str) -> AppointmentStatusOut:
    return await update_appointment_status(db, doctor_id, appointment_id, "completed", type_)


async def cancel(db: AsyncSession, doctor_id: str, appointment_id: str, type_: str) -> AppointmentStatusOut:
    return await update_appointment_status(db, doctor_id, appointment_id, "cancelled", type_)


async def confirm(db: AsyncSession, doctor_id: str, appointment_id: str, type_: str) -> AppointmentStatusOut:
    return await update_appointment_status(db, doctor_id, appointment_id, "confirmed", type_)
