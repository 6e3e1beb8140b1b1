"""
Reenvío de un chequeo de salud al doctor del turno como notificación.
"""
import datetime as dt
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.logger import get_module_logger
from app.models.appointment import Appointment, ApptStatus
from app.models.health_check import HealthCheck
from app.models.notification import DoctorNotification, NotificationStatus

log = get_module_logger(__name__)

FORWARDED_FROM = "health_check_booking"


def build_symptoms_payload(
    hc: HealthCheck,
    appointment_id: str,
    now: dt.datetime | None = None,
) -> dict[str, Any]:
    """Payload desnormalizado que ve el doctor (se guarda como JSON opaco)."""
    now = now or dt.datetime.utcnow()
    return {
        "symptoms": list(hc.symptoms or []),
        "severity": hc.severity or "",
        "duration": hc.duration or "",
        "previous_conditions": list(hc.previous_conditions or []),
        "medications": list(hc.medications or []),
        "notes": hc.notes or "",
        "analysis_results": dict(hc.analysis_results) if hc.analysis_results else None,
        "urgency_level": hc.urgency_level or "",
        "overall_assessment": hc.overall_assessment or "",
        "comprehensive_analysis": bool(hc.comprehensive_analysis),
        "check_date": (hc.created_at or now).isoformat(),
        "symptom_photos": dict(hc.symptom_photos or {}),
        "forwarded_from": FORWARDED_FROM,
        "booking_context": {
            "appointment_id": appointment_id,
            "forwarded_at": now.isoformat(),
            "patient_notes": "Health check data automatically forwarded from appointment booking",
        },
    }


async def upcoming_appointments(
    db: AsyncSession,
    user_id: str,
    today: dt.date | None = None,
) -> list[Appointment]:
    """Turnos pending/confirmed del paciente entre hoy y hoy + N días."""
    today = today or dt.date.today()
    until = today + dt.timedelta(days=settings.UPCOMING_WINDOW_DAYS)
    res = await db.execute(
        select(Appointment)
        .where(
            Appointment.user_id == user_id,
            Appointment.date >= today,
            Appointment.date <= until,
            Appointment.status.in_([ApptStatus.pending, ApptStatus.confirmed]),
        )
        .order_by(Appointment.date, Appointment.time)
    )
    return list(res.scalars().all())


async def send_health_check_to_doctor(
    db: AsyncSession,
    user_id: str,
    hc: HealthCheck,
    appointment: Appointment,
) -> bool:
    # ids antes del commit: un rollback expira las instancias
    hc_id, appointment_id, doctor_id = hc.id, appointment.id, appointment.doctor_id
    try:
        db.add(DoctorNotification(
            doctor_id=doctor_id,
            patient_id=user_id,
            appointment_id=appointment_id,
            health_check_id=hc_id,
            symptoms_data=build_symptoms_payload(hc, appointment_id),
            status=NotificationStatus.sent,
        ))
        await db.commit()
    except Exception:
        await db.rollback()
        log.exception("Error forwarding health check %s to doctor", hc_id)
        return False

    log.info("Health check %s forwarded to doctor %s for appointment %s", hc_id, doctor_id, appointment_id)
    return True


async def forward_health_check(
    db: AsyncSession,
    user_id: str,
    hc: HealthCheck,
    appointment_id: str | None = None,
    today: dt.date | None = None,
) -> tuple[bool, str | None]:
    """
    Con appointment_id: se usa ese turno (tiene que ser del paciente).
    Sin appointment_id: el turno más próximo de los próximos días; si no
    hay ninguno devuelve (False, None) y no inserta nada.
    Devuelve (enviado, id del turno usado).
    """
    hc_id = hc.id
    try:
        if appointment_id:
            res = await db.execute(
                select(Appointment).where(Appointment.id == appointment_id, Appointment.user_id == user_id)
            )
            appointment = res.scalar_one_or_none()
            if not appointment:
                log.info("Appointment %s not found for user %s", appointment_id, user_id)
                return False, None
        else:
            upcoming = await upcoming_appointments(db, user_id, today)
            if not upcoming:
                log.info("No upcoming appointments found for user %s", user_id)
                return False, None
            appointment = upcoming[0]
    except Exception:
        log.exception("Error checking appointments for health check %s", hc_id)
        return False, None

    target_id = appointment.id
    sent = await send_health_check_to_doctor(db, user_id, hc, appointment)
    return sent, target_id
