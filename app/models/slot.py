import uuid
import enum
import datetime as dt
from sqlalchemy import String, Enum, ForeignKey, DateTime, Date, Time, Integer, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.db import Base

class SlotStatus(str, enum.Enum):
    available = "available"
    booked = "booked"
    cancelled = "cancelled"
    completed = "completed"

class AppointmentSlot(Base):
    """Franja horaria publicada por el doctor; el paciente la reserva."""
    __tablename__ = "appointment_slots"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    doctor_id: Mapped[str] = mapped_column(String(36), ForeignKey("doctors.id"), index=True)

    date: Mapped[dt.date] = mapped_column(Date, index=True)
    start_time: Mapped[dt.time] = mapped_column(Time)
    end_time: Mapped[dt.time] = mapped_column(Time)
    duration: Mapped[int] = mapped_column(Integer, default=30)        # minutos
    max_patients: Mapped[int] = mapped_column(Integer, default=1)

    status: Mapped[SlotStatus] = mapped_column(Enum(SlotStatus), default=SlotStatus.available, index=True)

    # se completan al reservar
    user_id: Mapped[str | None] = mapped_column(String(36), ForeignKey("profiles.id"), nullable=True, index=True)
    patient_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    reason: Mapped[str | None] = mapped_column(String(255), nullable=True)

    created_at: Mapped[dt.datetime] = mapped_column(DateTime, default=dt.datetime.utcnow)
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime, default=dt.datetime.utcnow, onupdate=dt.datetime.utcnow)

    doctor = relationship("Doctor")

    __table_args__ = (
        Index("ix_slot_doctor_date_start", "doctor_id", "date", "start_time"),
    )
